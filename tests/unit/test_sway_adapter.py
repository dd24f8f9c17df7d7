"""
Unit tests for the Sway/i3 window adapter.

The i3ipc.aio connection is mocked; see mock_sway_connection in conftest.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, call, patch

import pytest

from sway_attach.config import PlacementConfig
from sway_attach.errors import PlacementError, WindowNotFoundError
from sway_attach.models.geometry import CoordinateSpace, Rectangle, ShadowInsets
from sway_attach.services.sway_adapter import SwayWindowAdapter


@pytest.fixture
def adapter(mock_sway_connection):
    return SwayWindowAdapter(mock_sway_connection)


class TestScreen:
    @pytest.mark.asyncio
    async def test_active_outputs_only(self, adapter):
        screen = await adapter.get_screen(42)

        assert [m.name for m in screen.monitors] == ["eDP-1", "HDMI-A-1"]

    @pytest.mark.asyncio
    async def test_work_area_from_visible_workspace(self, adapter):
        screen = await adapter.get_screen(42)

        laptop, external = screen.monitors
        assert laptop.work_area == Rectangle(x=0, y=30, width=1920, height=1050)
        assert external.work_area == Rectangle(x=1920, y=30, width=2560, height=1410)

    @pytest.mark.asyncio
    async def test_monitor_work_area_at_point(self, adapter):
        screen = await adapter.get_screen(42)

        area = await adapter.monitor_work_area(screen, (2000, 500))

        assert area.x == 1920
        assert area.height == 1410


class TestWindows:
    @pytest.mark.asyncio
    async def test_window_pixel_size(self, adapter):
        assert await adapter.window_pixel_size(42) == (400, 300)

    @pytest.mark.asyncio
    async def test_unknown_window(self, adapter):
        with pytest.raises(WindowNotFoundError) as excinfo:
            await adapter.window_pixel_size(999)

        assert excinfo.value.window_id == 999
        assert "999" in str(excinfo.value)

    @pytest.mark.asyncio
    async def test_shadow_from_config(self, mock_sway_connection):
        shadow = ShadowInsets(top=2, left=4, right=4, bottom=6)
        adapter = SwayWindowAdapter(mock_sway_connection, PlacementConfig(shadow=shadow))

        assert await adapter.window_shadow_insets(42) == shadow

    @pytest.mark.asyncio
    async def test_move_window(self, adapter, mock_sway_connection):
        await adapter.move_window(42, 1500, 700)

        mock_sway_connection.command.assert_awaited_once_with(
            "[con_id=42] move absolute position 1500 700"
        )

    @pytest.mark.asyncio
    async def test_move_window_rejected(self, adapter, mock_sway_connection):
        mock_sway_connection.command = AsyncMock(
            return_value=[SimpleNamespace(success=False, error="No matching node")]
        )

        with pytest.raises(PlacementError, match="No matching node"):
            await adapter.move_window(42, 0, 0)


class TestOrigin:
    @pytest.mark.asyncio
    async def test_root_space(self, adapter):
        assert await adapter.resolve_absolute_origin(CoordinateSpace()) == (0, 0)

    @pytest.mark.asyncio
    async def test_container_space(self, adapter):
        space = CoordinateSpace(x=2, y=3, con_id=7)

        assert await adapter.resolve_absolute_origin(space) == (102, 203)

    @pytest.mark.asyncio
    async def test_container_ends_walk(self, adapter):
        """Test ancestors above a container-bound space are not added"""
        space = CoordinateSpace(
            x=1,
            y=1,
            parent=CoordinateSpace(
                x=2, y=3, con_id=7, parent=CoordinateSpace(x=1000, y=1000)
            ),
        )

        assert await adapter.resolve_absolute_origin(space) == (103, 204)

    @pytest.mark.asyncio
    async def test_missing_container(self, adapter):
        with pytest.raises(WindowNotFoundError):
            await adapter.resolve_absolute_origin(CoordinateSpace(con_id=999))


class TestLifetime:
    """Test the adapter closes the connection it owns."""

    def test_close_quits_connection(self, mock_sway_connection):
        adapter = SwayWindowAdapter(mock_sway_connection)

        adapter.close()
        adapter.close()

        mock_sway_connection.main_quit.assert_called_once_with()
        assert adapter.conn is None

    @pytest.mark.asyncio
    async def test_async_context_manager(self, mock_sway_connection):
        async with SwayWindowAdapter(mock_sway_connection) as adapter:
            assert await adapter.window_pixel_size(42) == (400, 300)

        mock_sway_connection.main_quit.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_closed_on_error(self, mock_sway_connection):
        with pytest.raises(WindowNotFoundError):
            async with SwayWindowAdapter(mock_sway_connection) as adapter:
                await adapter.window_pixel_size(999)

        mock_sway_connection.main_quit.assert_called_once_with()


class TestConnect:
    """Test connection retry with exponential backoff."""

    @staticmethod
    def _connection(connect):
        instance = MagicMock()
        instance.connect = connect
        return MagicMock(return_value=instance)

    @pytest.mark.asyncio
    async def test_connects_after_retries(self):
        conn = MagicMock()
        conn.get_version = AsyncMock(return_value=SimpleNamespace(human_readable="sway version 1.9"))
        connect = AsyncMock(side_effect=[ConnectionRefusedError(), ConnectionRefusedError(), conn])

        with patch("sway_attach.services.sway_adapter.aio.Connection", self._connection(connect)), \
                patch("sway_attach.services.sway_adapter.asyncio.sleep", new_callable=AsyncMock) as sleep:
            adapter = await SwayWindowAdapter.connect(PlacementConfig(connect_attempts=5))

        assert adapter.conn is conn
        assert sleep.await_args_list == [call(0.1), call(0.2)]

    @pytest.mark.asyncio
    async def test_gives_up(self):
        connect = AsyncMock(side_effect=FileNotFoundError("no socket"))

        with patch("sway_attach.services.sway_adapter.aio.Connection", self._connection(connect)), \
                patch("sway_attach.services.sway_adapter.asyncio.sleep", new_callable=AsyncMock) as sleep:
            with pytest.raises(ConnectionError, match="after 3 attempts"):
                await SwayWindowAdapter.connect(PlacementConfig(connect_attempts=3))

        assert connect.await_count == 3
        assert sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_backoff_capped(self):
        connect = AsyncMock(side_effect=FileNotFoundError("no socket"))

        with patch("sway_attach.services.sway_adapter.aio.Connection", self._connection(connect)), \
                patch("sway_attach.services.sway_adapter.asyncio.sleep", new_callable=AsyncMock) as sleep:
            with pytest.raises(ConnectionError):
                await SwayWindowAdapter.connect(PlacementConfig(connect_attempts=8), initial_delay=1.0)

        assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0, 4.0, 5.0, 5.0, 5.0, 5.0]
