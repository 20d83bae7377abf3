"""
Driving the incremental search objects (Explore.check_next, FindShortest.check_level,
FindGroupCycles.check_next) when a caller just wants the answer.
"""

from tqdm import tqdm


def run_to_completion(step, max_steps=None, show_progress=False, desc="Searching") -> int:
    """
    Call `step()` until it returns False or `max_steps` calls have been made.
    Returns how many calls were made.
    """
    count = 0
    with tqdm(total=max_steps, desc=desc, disable=not show_progress) as bar:
        while max_steps is None or count < max_steps:
            more = step()
            count += 1
            bar.update(1)
            if not more:
                break
    return count
