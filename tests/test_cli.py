import contextlib
import io
import unittest

from freecell_core.cli import describe_result, format_location, main, parse_location, run_session
from game import (
    Card,
    EngineConfig,
    FoundationLoc,
    FreeCellGame,
    FreeCellLoc,
    GameState,
    MoveError,
    MoveResult,
    TableauLoc,
)

C = Card.parse


class TestLocationSyntax(unittest.TestCase):
    def test_given_location_text_when_parsing_then_location_built(self):
        self.assertEqual(parse_location('t3'), TableauLoc(3))
        self.assertEqual(parse_location('T3.4'), TableauLoc(3, 4))
        self.assertEqual(parse_location('c1'), FreeCellLoc(1))
        self.assertEqual(parse_location(' f2 '), FoundationLoc(2))

    def test_given_bad_text_when_parsing_then_value_error(self):
        for text in ('', 'x1', 't', 'tz', 'c1.2', 't1.'):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_location(text)

    def test_given_locations_when_formatting_then_cli_syntax(self):
        self.assertEqual(format_location(TableauLoc(3)), 't3')
        self.assertEqual(format_location(TableauLoc(3, 0)), 't3.0')
        self.assertEqual(format_location(FreeCellLoc(2)), 'c2')
        self.assertEqual(format_location(FoundationLoc(1)), 'f1')

    def test_given_results_when_describing_then_readable(self):
        self.assertEqual(describe_result(MoveResult.rejected(MoveError.INSUFFICIENT_CAPACITY)),
                         'rejected: InsufficientCapacity')
        ok = MoveResult(ok=True, cards=(C('4h'),), promoted=(C('Ad'),))
        self.assertEqual(describe_result(ok), 'moved 4♥; auto-promoted A♦')


class TestSession(unittest.TestCase):
    def _game(self):
        state = GameState.build(tableau=[[C('Kc'), C('5s')], [C('9c'), C('4h')], [C('Kh'), C('Ad')]])
        return FreeCellGame(state=state, config=EngineConfig(auto_route=False))

    def _run(self, game, lines):
        out = []
        run_session(game, lines, out.append)
        return '\n'.join(out)

    def test_given_move_command_then_move_applied_and_reported(self):
        game = self._game()
        text = self._run(game, ['t1 t0', 'quit', 't0 c0'])
        self.assertIn('moved 4♥', text)
        self.assertEqual(game.state.tableau[0], (C('Kc'), C('5s'), C('4h')))
        self.assertEqual(game.state.free_cells[0], None)

    def test_given_illegal_move_then_rule_reported(self):
        text = self._run(self._game(), ['t0 t1'])
        self.assertIn('rejected: DestinationMismatch', text)

    def test_given_click_commands_then_selection_protocol_used(self):
        game = self._game()
        self._run(game, ['sel t2'])
        self.assertEqual(game.state.selection, TableauLoc(2, 1))
        self._run(game, ['sel f0'])
        self.assertEqual(game.state.foundations[0], C('Ad'))

    def test_given_bad_input_then_errors_reported_and_session_continues(self):
        text = self._run(self._game(), ['t9 c0', 'zz', 'a b c', 'new x', 'help', 'moves'])
        self.assertIn('error:', text)
        self.assertIn('unknown command', text)
        self.assertIn('bad seed', text)
        self.assertIn('Commands', text)
        self.assertIn('t1.1 t0', text)

    def test_given_new_command_then_fresh_deal(self):
        game = self._game()
        self._run(game, ['new 4'])
        self.assertEqual(game.state.tableau_count() + sum(1 for _ in game.state.foundation_cards()), 52)

    def test_given_show_flag_when_running_main_then_board_printed(self):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            main(['--show', '--seed', '3'])
        self.assertIn('cells:', buf.getvalue())
        self.assertIn('foundations:', buf.getvalue())


if __name__ == '__main__':
    unittest.main()
