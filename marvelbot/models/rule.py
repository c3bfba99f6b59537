from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Rule:
    """
    A rule from the Rules Reference.

    Attributes:
        name: Lookup key, expected (not enforced) to be unique
        text: Primary rule text
        text2: Continuation text for long rules
        version: Rules Reference version the text was taken from
        related: Names of related rules
    """

    name: str
    text: str = ""
    text2: str | None = None
    version: str | None = None
    related: tuple[str, ...] = ()
