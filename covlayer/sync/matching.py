"""
Parameter equivalence policies
"""

from typing import Any

def _ids(categories: Any) -> Any:
    return [getattr(cat, 'id', None) for cat in categories]

def default_match(p1: Any, p2: Any) -> bool:
    """
    Default check whether two Parameter objects describe the same thing

    No vocabulary mapping or unit conversion is attempted, it is an exact
    match or nothing:

    - identical parameter ids match;
    - otherwise both observed properties need an id and the ids must agree;
    - units are compared only if both sides declare one (unit ids if both
      have them, else symbols); a unit on one side only never matches;
    - categories must be present on both sides or neither, have the same
      length, all carry ids, and every id of the first must occur in the
      second.

    Malformed parameters never raise, they simply do not match.
    """
    id1 = getattr(p1, 'id', None)
    id2 = getattr(p2, 'id', None)
    if id1 and id2 and id1 == id2:
        return True

    op1 = getattr(p1, 'observed_property', None)
    op2 = getattr(p2, 'observed_property', None)
    op_id1 = getattr(op1, 'id', None)
    op_id2 = getattr(op2, 'id', None)
    if not op_id1 or not op_id2:
        return False
    if op_id1 != op_id2:
        return False

    u1 = getattr(p1, 'unit', None)
    u2 = getattr(p2, 'unit', None)
    if u1 is not None and u2 is not None:
        uid1, uid2 = getattr(u1, 'id', None), getattr(u2, 'id', None)
        sym1, sym2 = getattr(u1, 'symbol', None), getattr(u2, 'symbol', None)
        if uid1 and uid2:
            if uid1 != uid2:
                return False
        elif sym1 and sym2 and sym1 != sym2:
            return False
    elif u1 is not None or u2 is not None:
        return False

    c1 = getattr(p1, 'categories', None)
    c2 = getattr(p2, 'categories', None)
    if c1 is not None and c2 is not None:
        if len(c1) != len(c2):
            return False
        ids1, ids2 = _ids(c1), _ids(c2)
        if not all(ids1) or not all(ids2):
            return False
        if any(cat_id not in ids2 for cat_id in ids1):
            return False
    elif c1 is not None or c2 is not None:
        return False

    return True
