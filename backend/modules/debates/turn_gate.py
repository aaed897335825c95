"""
Turn gate for argument submission.

Arguments strictly alternate between the two participants and the creator
opens. The gate is a pure function of the debate's participants and its
ordered argument history; it keeps no state between calls, so correctness
under concurrency only depends on the caller evaluating it inside the
per-debate lock together with the append.
"""

from typing import Sequence

from .models import Argument, Debate, TurnDecision

OPPONENT_NOT_JOINED = "opponent not joined"
NOT_A_PARTICIPANT = "not a participant"
CREATOR_OPENS = "waiting for creator to submit first argument"
WAIT_FOR_OPPONENT = "wait for opponent's response"


def next_round_number(history: Sequence[Argument], user_id: str) -> int:
    """Round number the user's next argument gets.

    Each side counts independently: creator round 3 and challenger round 3
    may coexist.
    """
    return sum(1 for argument in history if argument.user_id == user_id) + 1


def check_turn(
    debate: Debate,
    history: Sequence[Argument],
    author_id: str,
) -> TurnDecision:
    """
    Decide whether author_id may submit the next argument.

    Args:
        debate: The debate (only participants are read)
        history: Existing arguments, ordered by posted_at
        author_id: Candidate author

    Returns:
        TurnDecision with the assigned round number when allowed
    """
    if debate.challenger_id is None:
        return TurnDecision(allowed=False, reason=OPPONENT_NOT_JOINED)

    if author_id not in (debate.creator_id, debate.challenger_id):
        return TurnDecision(allowed=False, reason=NOT_A_PARTICIPANT)

    if not history:
        if author_id != debate.creator_id:
            return TurnDecision(allowed=False, reason=CREATOR_OPENS)
        return TurnDecision(allowed=True, round_number=1)

    if history[-1].user_id == author_id:
        return TurnDecision(allowed=False, reason=WAIT_FOR_OPPONENT)

    return TurnDecision(allowed=True, round_number=next_round_number(history, author_id))


def count_words(content: str) -> int:
    """Whitespace-delimited word count."""
    return len(content.split())
