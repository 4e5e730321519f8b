"""
Tests for the paint controller: cursor tracking, painting, spawn placement,
layer toggling, tile selection, scrolling and the export trigger.
"""

from tile_editor.input_handler import InputState
from tile_editor.models import Direction, Layer, TileType


def at_cell(row, col, **kwargs):
    """Input with the pointer in the middle of a screen cell."""
    return InputState(pointer=(col * 32 + 16, row * 32 + 16), **kwargs)


class TestCursor:
    def test_pointer_sets_cursor(self, controller, world):
        controller.handle(at_cell(3, 7))
        assert world.cursor == (3, 7)

    def test_cursor_includes_viewport_offset(self, controller, world):
        world.grid.scroll(Direction.RIGHT)
        world.grid.scroll(Direction.DOWN)
        controller.handle(at_cell(3, 7))
        assert world.cursor == (4, 8)

    def test_cursor_follows_scroll_without_pointer_motion(self, controller, world):
        controller.handle(at_cell(0, 0))
        controller.handle(InputState(directions_held=frozenset({Direction.RIGHT})))
        assert world.cursor == (0, 1)

    def test_cursor_clamped(self, controller, world):
        controller.handle(InputState(pointer=(-50, 99999)))
        assert world.cursor == (29, 0)

    def test_no_pointer_keeps_cursor(self, controller, world):
        controller.handle(at_cell(2, 2))
        controller.handle(InputState())
        assert world.cursor == (2, 2)


class TestPainting:
    def test_default_tile_and_layer(self, world):
        assert world.active_tile is TileType.DIRT
        assert world.layer_mode is Layer.FOREGROUND

    def test_primary_held_paints_active_tile(self, controller, world):
        controller.handle(at_cell(5, 5, primary_held=True))
        assert world.grid.get_tile(Layer.FOREGROUND, 5, 5) is TileType.DIRT

    def test_continuous_stamping_while_held(self, controller, world):
        for col in range(4):
            controller.handle(at_cell(1, col, primary_held=True))
        for col in range(4):
            assert world.grid.get_tile(Layer.FOREGROUND, 1, col) is TileType.DIRT

    def test_pointer_motion_without_button_does_not_paint(self, controller, world):
        controller.handle(at_cell(1, 1))
        assert not world.grid.layers.any()

    def test_background_paint_rejected_under_solid(self, controller, world):
        controller.handle(InputState(digits_pressed=(6,)))
        controller.handle(at_cell(5, 5, primary_held=True))
        controller.handle(at_cell(5, 5, tertiary_pressed=True, digits_pressed=(1,)))
        controller.handle(at_cell(5, 5, primary_held=True))
        assert world.layer_mode is Layer.BACKGROUND
        assert world.grid.get_tile(Layer.FOREGROUND, 5, 5) is TileType.STONE
        assert world.grid.get_tile(Layer.BACKGROUND, 5, 5) is TileType.AIR


class TestSelection:
    def test_digit_selects_tile(self, controller, world):
        controller.handle(InputState(digits_pressed=(7,)))
        assert world.active_tile is TileType.PLANKS
        controller.handle(InputState(digits_pressed=(0,)))
        assert world.active_tile is TileType.AIR

    def test_digit_nine_ignored(self, controller, world):
        controller.handle(InputState(digits_pressed=(4,)))
        controller.handle(InputState(digits_pressed=(9,)))
        assert world.active_tile is TileType.SPIKES

    def test_tertiary_toggles_layer(self, controller, world):
        controller.handle(InputState(tertiary_pressed=True))
        assert world.layer_mode is Layer.BACKGROUND
        controller.handle(InputState(tertiary_pressed=True))
        assert world.layer_mode is Layer.FOREGROUND


class TestSpawn:
    def test_spawn_snaps_down(self, controller, world):
        controller.handle(at_cell(3, 2, secondary_pressed=True))
        assert world.spawn == (0, 0)

    def test_spawn_snaps_to_block(self, controller, world):
        for _ in range(10):
            controller.handle(InputState(directions_held=frozenset({Direction.RIGHT})))
        for _ in range(10):
            controller.handle(InputState(directions_held=frozenset({Direction.DOWN})))
        controller.handle(at_cell(20, 20, secondary_pressed=True))
        row, col = world.cursor
        assert (row, col) == (27, 30)
        assert world.spawn == (16, 16) == (row // 16 * 16, col // 16 * 16)

    def test_spawn_always_multiple_of_block(self, controller, world):
        for row in range(0, 30, 3):
            for col in range(0, 40, 7):
                controller.handle(at_cell(min(row, 22), min(col, 29), secondary_pressed=True))
                assert world.spawn[0] % 16 == 0
                assert world.spawn[1] % 16 == 0

    def test_spawn_unchanged_without_press(self, controller, world):
        controller.handle(at_cell(20, 20, primary_held=True))
        assert world.spawn == (0, 0)


class TestScrollPriority:
    def test_right_beats_everything(self, controller, world):
        controller.handle(InputState(directions_held=frozenset(Direction)))
        assert world.grid.offset == (0, 32)

    def test_left_beats_vertical(self, controller, world):
        world.grid.scroll(Direction.RIGHT)
        controller.handle(
            InputState(directions_held=frozenset({Direction.LEFT, Direction.DOWN}))
        )
        assert world.grid.offset == (0, 0)

    def test_up_beats_down(self, controller, world):
        world.grid.scroll(Direction.DOWN)
        controller.handle(
            InputState(directions_held=frozenset({Direction.UP, Direction.DOWN}))
        )
        assert world.grid.offset == (0, 0)

    def test_down_alone(self, controller, world):
        controller.handle(InputState(directions_held=frozenset({Direction.DOWN})))
        assert world.grid.offset == (32, 0)


class TestExportTrigger:
    def test_confirm_exports(self, controller, world, exports):
        controller.handle(InputState(confirm_pressed=True))
        assert exports == [world]

    def test_no_export_without_confirm(self, controller, exports):
        controller.handle(InputState(primary_held=True))
        assert exports == []

    def test_controller_never_stops_itself(self, controller):
        controller.handle(InputState(quit=True))
        assert controller.running
