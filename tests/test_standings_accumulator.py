"""Tests for folding games into per-player season statistics."""

from __future__ import annotations

import unittest
from typing import Any

from pokerleague.standings.accumulator import accumulate, completed_games_in_order
from pokerleague.standings.models import GameRecord, PlayerResult
from pokerleague.standings.ranking import assign_ranks


def make_game(
    game_id: str, date: str, results: list[PlayerResult], **kwargs: Any
) -> GameRecord:
    """Create a completed game with a 20 buy-in unless overridden."""
    kwargs.setdefault("buyin", 20)
    return GameRecord(id=game_id, date=date, results=results, **kwargs)


class TestAccumulate(unittest.TestCase):
    """Test case for the season statistics accumulator."""

    def setUp(self) -> None:
        self.game1 = make_game(
            "g1",
            "2024-01-01",
            [
                PlayerResult("A", position=1, winnings=200),
                PlayerResult("B", position=2, winnings=50),
                PlayerResult("C", position=3, winnings=0),
            ],
        )
        self.game2 = make_game(
            "g2",
            "2024-01-08",
            [
                PlayerResult("A", position=1, winnings=100),
                PlayerResult("B", position=1, winnings=100),
                PlayerResult("C", position=3, winnings=0),
            ],
        )

    def test_first_game_totals(self) -> None:
        stats = accumulate([self.game1])
        self.assertEqual(stats["A"].points, 2)
        self.assertEqual(stats["B"].points, 1)
        self.assertEqual(stats["C"].points, 0)
        self.assertEqual(stats["A"].net_winnings, 180)
        self.assertEqual(stats["B"].net_winnings, 30)
        self.assertEqual(stats["C"].net_winnings, -20)

    def test_two_game_season(self) -> None:
        """Points, games, wins and ranks over a season with a tie for first."""
        stats = accumulate([self.game1, self.game2])

        self.assertEqual(stats["A"].points, 3.0)
        self.assertEqual(stats["B"].points, 2.0)
        self.assertEqual(stats["C"].points, 0)
        for user_id in ("A", "B", "C"):
            self.assertEqual(stats[user_id].games, 2)

        self.assertEqual(stats["A"].wins, 2)
        self.assertEqual(stats["B"].wins, 1)
        self.assertEqual(stats["C"].wins, 0)
        self.assertEqual(stats["A"].win_rate, 100.0)
        self.assertEqual(stats["B"].win_rate, 50.0)
        self.assertEqual(stats["B"].avg_position, 1.5)
        self.assertEqual(stats["A"].net_winnings, 260)
        self.assertEqual(stats["C"].total_buyins, 40)

        ranks = {entry.user_id: entry.rank for entry in assign_ranks(stats.values())}
        self.assertEqual(ranks, {"A": 1, "B": 2, "C": 3})

    def test_streaks_follow_each_players_games(self) -> None:
        stats = accumulate([self.game1, self.game2])
        self.assertEqual((stats["A"].current_streak, stats["A"].streak_type), (2, "win"))
        self.assertEqual((stats["B"].current_streak, stats["B"].streak_type), (1, "win"))
        self.assertEqual(
            (stats["C"].current_streak, stats["C"].streak_type), (2, "loss")
        )

    def test_games_are_processed_in_date_order(self) -> None:
        """Streaks are the same whatever order the games are supplied in."""
        in_order = accumulate([self.game1, self.game2])
        reversed_order = accumulate([self.game2, self.game1])
        self.assertEqual(
            (in_order["B"].current_streak, in_order["B"].streak_type),
            (reversed_order["B"].current_streak, reversed_order["B"].streak_type),
        )

    def test_time_breaks_same_day_order(self) -> None:
        late = make_game(
            "late",
            "2024-01-01",
            [PlayerResult("A", position=1), PlayerResult("B", position=2)],
            time="21:00",
        )
        early = make_game(
            "early",
            "2024-01-01",
            [PlayerResult("A", position=2), PlayerResult("B", position=1)],
            time="18:30",
        )
        ordered = completed_games_in_order([late, early])
        self.assertEqual([g.id for g in ordered], ["early", "late"])
        self.assertEqual(accumulate([late, early])["A"].streak_type, "win")

    def test_streak_ignores_other_players_games(self) -> None:
        """A game B plays alone between A's games does not touch A's streak."""
        a_first = make_game(
            "a1", "2024-02-01", [PlayerResult("A", 1), PlayerResult("X", 2)]
        )
        a_second = make_game(
            "a2", "2024-02-10", [PlayerResult("A", 2), PlayerResult("X", 1)]
        )
        b_between = make_game(
            "b1", "2024-02-05", [PlayerResult("B", 1), PlayerResult("Y", 2)]
        )

        without_b = accumulate([a_first, a_second])["A"]
        with_b = accumulate([a_first, b_between, a_second])["A"]
        self.assertEqual(
            (without_b.current_streak, without_b.streak_type),
            (with_b.current_streak, with_b.streak_type),
        )
        self.assertEqual((with_b.current_streak, with_b.streak_type), (1, "loss"))

    def test_scheduled_games_are_excluded(self) -> None:
        scheduled = make_game(
            "s1",
            "2024-03-01",
            [PlayerResult("A", 0), PlayerResult("D", 0)],
            status="scheduled",
        )
        stats = accumulate([self.game1, scheduled])
        self.assertEqual(stats["A"].games, 1)
        self.assertNotIn("D", stats)

    def test_players_without_games_are_absent(self) -> None:
        self.assertEqual(accumulate([]), {})
        self.assertNotIn("Z", accumulate([self.game1]))

    def test_rebuys_add_buyins(self) -> None:
        game = make_game(
            "r1",
            "2024-01-01",
            [PlayerResult("A", 1, winnings=100, rebuys=2), PlayerResult("B", 2)],
            buyin=30,
        )
        stats = accumulate([game])
        self.assertEqual(stats["A"].rebuys, 2)
        self.assertEqual(stats["A"].total_buyins, 90)
        self.assertEqual(stats["A"].net_winnings, 10)
        self.assertEqual(stats["B"].total_buyins, 30)

    def test_best_hand_pot_goes_to_winner(self) -> None:
        game = make_game(
            "bh",
            "2024-01-01",
            [
                PlayerResult(
                    "A", 1, winnings=60, best_hand_participant=True, best_hand_winner=True
                ),
                PlayerResult("B", 2, best_hand_participant=True),
                PlayerResult("C", 3, best_hand_participant=True),
            ],
        )
        stats = accumulate([game])

        self.assertEqual(stats["A"].best_hand_winnings, 15)
        self.assertEqual(stats["A"].winnings, 75)
        self.assertEqual(stats["A"].best_hand_win_count, 1)
        for user_id in ("A", "B", "C"):
            self.assertEqual(stats[user_id].best_hand_participation_count, 1)
            self.assertEqual(stats[user_id].best_hand_costs, 5)
            self.assertEqual(stats[user_id].total_buyins, 25)
        self.assertEqual(stats["A"].net_winnings, 50)

    def test_best_hand_pot_without_winner(self) -> None:
        game = make_game(
            "bh0",
            "2024-01-01",
            [
                PlayerResult("A", 1, best_hand_participant=True),
                PlayerResult("B", 2, best_hand_participant=True),
                PlayerResult("C", 3, best_hand_participant=True),
            ],
        )
        stats = accumulate([game])
        for user_id in ("A", "B", "C"):
            self.assertEqual(stats[user_id].winnings, 0)
            self.assertEqual(stats[user_id].best_hand_winnings, 0)
            self.assertEqual(stats[user_id].total_buyins, 25)

    def test_total_buyins_cover_base_buyins(self) -> None:
        stats = accumulate([self.game1, self.game2])
        for s in stats.values():
            self.assertGreaterEqual(s.total_buyins, s.games * 20)

    def test_results_without_user_are_skipped(self) -> None:
        game = make_game(
            "anon", "2024-01-01", [PlayerResult("A", 1), PlayerResult("", 2)]
        )
        with self.assertLogs("pokerleague.standings.accumulator", level="WARNING"):
            stats = accumulate([game])
        self.assertEqual(list(stats), ["A"])

    def test_cash_games(self) -> None:
        """Cash games score no points and count profitable sessions as wins."""
        cash = make_game(
            "cash1",
            "2024-01-01",
            [PlayerResult("A", 0, winnings=45), PlayerResult("B", 0, winnings=0)],
            game_type="cash",
        )
        stats = accumulate([cash])
        self.assertEqual(stats["A"].points, 0)
        self.assertEqual(stats["A"].wins, 1)
        self.assertEqual(stats["B"].wins, 0)
        self.assertEqual(stats["A"].avg_position, 0)
        self.assertEqual(stats["A"].streak_type, "win")

    def test_game_type_filter(self) -> None:
        cash = make_game(
            "cash1",
            "2024-01-02",
            [PlayerResult("A", 0, winnings=45), PlayerResult("D", 0)],
            game_type="cash",
        )
        tournament_only = accumulate([self.game1, cash], game_type="tournament")
        self.assertEqual(tournament_only["A"].games, 1)
        self.assertNotIn("D", tournament_only)

        cash_only = accumulate([self.game1, cash], game_type="cash")
        self.assertEqual(set(cash_only), {"A", "D"})

    def test_players_keep_first_appearance_order(self) -> None:
        stats = accumulate([self.game2, self.game1])
        self.assertEqual(list(stats), ["A", "B", "C"])

    def test_malformed_stored_game_degrades(self) -> None:
        game = GameRecord.from_dict(
            {
                "date": "2024-01-01",
                "time": 1830,
                "results": [
                    {"userId": "A", "position": 1, "winnings": 40},
                    {"userId": "B", "position": float("nan"), "rebuys": "inf"},
                ],
            },
            "bad",
        )
        stats = accumulate([game])
        self.assertEqual(list(stats), ["A", "B"])
        self.assertEqual(stats["A"].points, 1.0)
        self.assertEqual(stats["A"].wins, 1)
        self.assertEqual(stats["B"].rebuys, 0)
        self.assertEqual(stats["B"].total_buyins, 20)


if __name__ == "__main__":
    unittest.main()
