from typing import List, Optional

from ..exceptions import InvalidSelection


def parse_selection(answer: str, count: int) -> Optional[List[int]]:
    """Turn the operator's answer into zero-based indexes of entries to push.

    ``y`` selects every entry, ``n`` cancels (returns None) and anything else
    is read as space-separated 1-based line numbers.
    """
    answer = answer.strip()
    if answer in ("y", "Y"):
        return list(range(count))
    if answer in ("n", "N"):
        return None

    indexes = []
    for token in answer.split():
        try:
            number = int(token)
        except ValueError:
            raise InvalidSelection(f"Invalid line number: {token!r}") from None
        if not 1 <= number <= count:
            raise InvalidSelection(f"Line number {number} is out of range 1-{count}")
        indexes.append(number - 1)

    if not indexes:
        raise InvalidSelection("No line numbers given")
    return indexes
