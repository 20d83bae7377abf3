"""
Post-processing of an exploration: grouping states by structure, and splitting the state graph
into the components a single flex connects.
"""

from flexagon.tracker import get_structure_key


def group_by_structure(flexagons) -> list[list[int]]:
    """
    Partition state indexes into classes whose pats have the same shapes (up to rotation and
    turnover). Classes come in order of their first member.
    """
    groups = {}
    for i, flexagon in enumerate(flexagons):
        groups.setdefault(get_structure_key(flexagon), []).append(i)
    return list(groups.values())


def find_subgraphs(found_flexes, flex_name: str) -> list[list[int]]:
    """
    Components of the state graph using only edges of `flex_name` (any rotation or turnover).
    Every state ends up in exactly one component; states without such an edge are alone.
    """
    state_count = len(found_flexes)
    for edges in found_flexes:
        for edge in edges:
            state_count = max(state_count, edge.to_state + 1)

    component_of = [-1] * state_count
    members = []

    for i, edges in enumerate(found_flexes):
        group = [i] + [edge.to_state for edge in edges if edge.flex == flex_name]
        known = sorted({component_of[s] for s in group if component_of[s] >= 0})
        if not known:
            target = len(members)
            members.append([])
        else:
            target = known[0]
            # the neighbours span several components: fold them into the first
            for other in known[1:]:
                for s in members[other]:
                    component_of[s] = target
                members[target] += members[other]
                members[other] = []
        for s in group:
            if component_of[s] < 0:
                component_of[s] = target
                members[target].append(s)

    # states that were only ever reached, never explored
    for s in range(state_count):
        if component_of[s] < 0:
            component_of[s] = len(members)
            members.append([s])

    return sorted((sorted(m) for m in members if m), key=lambda m: m[0])
