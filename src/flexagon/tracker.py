"""
=================
TRACKER
=================

Canonical keys for flexagon states, and the memo table searches use to know which states they've
already seen.

Two flexagons get the same key exactly when one can be turned into the other by rotating the
current hinge and/or turning the whole flexagon over. The key is built by
    1. finding the reference leaf (the leaf on top of pat 0 when the tracker was created, or the
       smallest id present if that leaf is gone),
    2. turning the flexagon over if that leaf is face down,
    3. rotating so the pat holding it comes first,
    4. joining the pats and appending the directions.
"""

from flexagon.flexagon import Flexagon


class Tracker:
    def __init__(self, flexagon: Flexagon):
        self.reference_id = abs(flexagon.pats[0].get_top())
        self.keys = {}
        self.flexagons = []

    def __len__(self):
        return len(self.flexagons)

    # ================= Canonical form ==================

    def orient(self, flexagon: Flexagon) -> Flexagon:
        """The rotation/turnover of `flexagon` that keys are read from"""
        where = flexagon.find_id(self.reference_id)
        if where is None:
            smallest = min(abs(leaf) for leaf in flexagon.get_leaves())
            where = flexagon.find_id(smallest)
        index, is_face_up = where
        if not is_face_up:
            flexagon = flexagon.turn_over()
            index = flexagon.get_pat_count() - 1 - index
        return flexagon.rotate_right(index)

    def get_key(self, flexagon: Flexagon) -> str:
        oriented = self.orient(flexagon)
        return str(oriented) + _directions_key(oriented)

    # ================= Memo table ==================

    def find_maybe_add(self, flexagon: Flexagon):
        """
        Index of a previously seen state equivalent to `flexagon`, or None after
        recording it as a new state (it then gets index len(self) - 1).
        """
        key = self.get_key(flexagon)
        index = self.keys.get(key)
        if index is not None:
            return index
        self.keys[key] = len(self.flexagons)
        self.flexagons.append(flexagon)
        return None

    def get_index(self, flexagon: Flexagon):
        return self.keys.get(self.get_key(flexagon))

    def get_flexagons(self) -> list[Flexagon]:
        return self.flexagons


def _directions_key(flexagon: Flexagon) -> str:
    if flexagon.directions is None:
        return ""
    return " " + flexagon.directions.as_string()


def get_structure_key(flexagon: Flexagon) -> str:
    """
    Key comparing shapes only. Leaf ids can't pick an orientation here, so every rotation and
    turnover is tried and the smallest reading wins.
    """
    n = flexagon.get_pat_count()
    candidates = []
    for side in (flexagon, flexagon.turn_over()):
        for k in range(n):
            rotated = side.rotate_right(k)
            candidates.append(rotated.get_structure() + _directions_key(rotated))
    return min(candidates)
