from roto_clash import tournament
from roto_clash.agents import HeuristicAgent, RandomAgent
from roto_clash.types import Difficulty, PlayerId


def test_tournament_smoke():
    result = tournament.run_tournament(
        HeuristicAgent(seed=1),
        RandomAgent(seed=2),
        games=4,
        seed=0,
        difficulty=Difficulty.MEDIUM,
        max_turns=40,
    )

    assert result.games == 4
    assert result.wins[PlayerId.PLAYER1] + result.wins[PlayerId.PLAYER2] + result.undecided == 4
    assert result.avg_turns > 0
    assert 0.0 <= result.win_rate(PlayerId.PLAYER1) <= 1.0
