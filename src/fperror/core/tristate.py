"""
Three-Valued Outcomes

Comparisons between abstract floats cannot always be decided: two
overlapping error intervals admit both orderings. The core therefore
answers with TRUE, FALSE or UNCERTAIN and leaves turning UNCERTAIN into
a concrete Boolean to the caller (see fperror.choice).
"""

from enum import Enum


class Tri(Enum):
    """Result of a comparison over abstract floats."""
    TRUE = "true"
    FALSE = "false"
    UNCERTAIN = "uncertain"

    @classmethod
    def from_bool(cls, flag: bool) -> 'Tri':
        return cls.TRUE if flag else cls.FALSE

    @property
    def is_certain(self) -> bool:
        return self is not Tri.UNCERTAIN

    def __bool__(self):
        raise TypeError(
            "Tri outcomes have no truth value; compare against Tri members "
            "or resolve them with fperror.choice.resolve"
        )


def tri_not(a: Tri) -> Tri:
    if a is Tri.TRUE:
        return Tri.FALSE
    if a is Tri.FALSE:
        return Tri.TRUE
    return Tri.UNCERTAIN


def tri_and(a: Tri, b: Tri) -> Tri:
    """Kleene conjunction: FALSE dominates, then UNCERTAIN."""
    if a is Tri.FALSE or b is Tri.FALSE:
        return Tri.FALSE
    if a is Tri.TRUE and b is Tri.TRUE:
        return Tri.TRUE
    return Tri.UNCERTAIN


def tri_or(a: Tri, b: Tri) -> Tri:
    """Kleene disjunction: TRUE dominates, then UNCERTAIN."""
    if a is Tri.TRUE or b is Tri.TRUE:
        return Tri.TRUE
    if a is Tri.FALSE and b is Tri.FALSE:
        return Tri.FALSE
    return Tri.UNCERTAIN
