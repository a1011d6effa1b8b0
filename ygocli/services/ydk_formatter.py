"""
YDK deck-list formatter.

YDK is the plain-text deck format read by dueling simulators
(YGOPro, EDOPro, Dueling Nexus). One passcode per line; multiple copies
are written as repeated lines.

    #created by YGO CLI Collection
    #main
    46986414
    46986414
    #extra
    !side
"""

from collections.abc import Iterable

YDK_HEADER = "#created by YGO CLI Collection"
YDK_MAIN = "#main"
YDK_EXTRA = "#extra"
YDK_SIDE = "!side"


def format_ydk(main_deck: Iterable[tuple[int, int]]) -> str:
    """
    Format card passcodes as a YDK document.

    Args:
        main_deck: (card_id, count) pairs, written in the order given

    Returns:
        YDK text, newline-terminated. Extra and side decks are always empty.
    """
    lines: list[str] = [YDK_HEADER, YDK_MAIN]

    for card_id, count in main_deck:
        lines.extend([str(card_id)] * count)

    lines.append(YDK_EXTRA)
    lines.append(YDK_SIDE)

    return "\n".join(lines) + "\n"
