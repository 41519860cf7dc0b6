import unittest

from game import (
    Card,
    FoundationLoc,
    FreeCellLoc,
    GameState,
    GameStatus,
    auto_promote,
    check_conservation,
    deal_new_game,
    duplicate_cards,
    find_foundation,
    game_status,
    is_won,
    play_move,
    promote_once,
)

C = Card.parse
KINGS = [C('Kh'), C('Kd'), C('Kc'), C('Ks')]


class TestAutoPromotion(unittest.TestCase):
    def test_given_chain_across_piles_when_sweeping_then_reaches_fixed_point(self):
        state = GameState.build(tableau=[[C('3h')], [C('5s'), C('2h')], [C('Ah')]])
        after, promoted = auto_promote(state)
        self.assertEqual(promoted, [C('Ah'), C('2h'), C('3h')])
        self.assertEqual(after.foundations[0], C('3h'))
        self.assertEqual(after.tableau[0], ())
        self.assertEqual(after.tableau[1], (C('5s'),))
        self.assertEqual(after.tableau[2], ())

    def test_given_stacked_promotable_cards_in_one_pile_then_all_promoted(self):
        state = GameState.build(tableau=[[C('9c'), C('2d'), C('Ad')]])
        after, promoted = promote_once(state)
        self.assertEqual(promoted, [C('Ad'), C('2d')])
        self.assertEqual(after.tableau[0], (C('9c'),))

    def test_given_swept_state_when_sweeping_again_then_nothing_changes(self):
        for seed in range(10):
            with self.subTest(seed=seed):
                once, _ = auto_promote(deal_new_game(seed=seed))
                twice, promoted = auto_promote(once)
                self.assertEqual(promoted, [])
                self.assertEqual(twice, once)
                for pile in once.tableau:
                    if pile:
                        self.assertIsNone(find_foundation(once, pile[-1]))

    def test_given_free_cell_card_then_not_auto_promoted(self):
        state = GameState.build(free_cells=[C('Ac')])
        after, promoted = auto_promote(state)
        self.assertEqual(promoted, [])
        self.assertEqual(after.free_cells[0], C('Ac'))


class TestWinDetection(unittest.TestCase):
    def test_given_four_kings_and_empty_tableau_then_won(self):
        state = GameState.build(foundations=KINGS)
        self.assertTrue(is_won(state))
        self.assertEqual(game_status(state), GameStatus.WON)
        check_conservation(state)

    def test_given_51_cards_home_and_king_in_free_cell_then_not_won(self):
        state = GameState.build(free_cells=[C('Ks')], foundations=[C('Kh'), C('Kd'), C('Kc'), C('Qs')])
        check_conservation(state)
        self.assertFalse(is_won(state))
        self.assertEqual(game_status(state), GameStatus.IN_PROGRESS)

    def test_given_last_king_moved_home_then_move_reports_win(self):
        state = GameState.build(free_cells=[C('Ks')], foundations=[C('Kh'), C('Kd'), C('Kc'), C('Qs')])
        after, result = play_move(state, FreeCellLoc(0), FoundationLoc(3))
        self.assertTrue(result.ok)
        self.assertTrue(result.won)
        self.assertTrue(is_won(after))

    def test_given_sweep_clears_last_cards_then_move_reports_win(self):
        # Moving Q♠ home lets the sweep finish the game with K♠.
        state = GameState.build(
            tableau=[[C('Ks')]],
            free_cells=[C('Qs')],
            foundations=[C('Kh'), C('Kd'), C('Kc'), C('Js')],
        )
        after, result = play_move(state, FreeCellLoc(0), FoundationLoc(3))
        self.assertTrue(result.won)
        self.assertEqual(result.promoted, (C('Ks'),))
        self.assertTrue(is_won(after))

    def test_given_new_game_then_not_won(self):
        self.assertFalse(is_won(deal_new_game(seed=0)))


class TestConservation(unittest.TestCase):
    def test_given_missing_card_then_assertion_error(self):
        state = deal_new_game(seed=2)
        broken = state.with_pile(0, state.tableau[0][:-1])
        with self.assertRaises(AssertionError):
            check_conservation(broken)

    def test_given_duplicated_card_then_assertion_error(self):
        state = deal_new_game(seed=2)
        broken = state.with_free_cell(0, state.tableau[0][-1])
        with self.assertRaises(AssertionError):
            check_conservation(broken)

    def test_given_repeated_cards_then_listed_once_each(self):
        state = GameState.build(
            tableau=[[C('9c'), C('3h')], [C('3h')]],
            free_cells=[C('9c')],
            foundations=[C('4h')],
        )
        self.assertEqual(duplicate_cards(state), [C('9c'), C('3h')])

    def test_given_partial_board_without_repeats_then_no_duplicates(self):
        state = GameState.build(tableau=[[C('9c')]], foundations=[C('2h')])
        self.assertEqual(duplicate_cards(state), [])
        self.assertEqual(duplicate_cards(deal_new_game(seed=4)), [])


if __name__ == '__main__':
    unittest.main()
