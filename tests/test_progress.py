from flexagon.progress import run_to_completion


def countdown(n):
    calls = []

    def step():
        calls.append(1)
        return len(calls) < n

    return step, calls


def test_runs_until_false():
    step, calls = countdown(5)
    assert run_to_completion(step) == 5
    assert len(calls) == 5


def test_max_steps():
    step, calls = countdown(100)
    assert run_to_completion(step, max_steps=7) == 7
    assert len(calls) == 7


def test_with_progress_bar():
    step, _ = countdown(3)
    assert run_to_completion(step, show_progress=True, desc="Testing") == 3
