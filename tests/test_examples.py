from pathlib import Path

from nesterov_es.tracking import GenerationTracker

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


class RecordingTracker(GenerationTracker):
    created = []

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.kwargs = kwargs
        RecordingTracker.created.append(self)


def test_nes_experiment_uses_experiment_wandb_project(monkeypatch, tmp_path):
    monkeypatch.syspath_prepend(str(EXAMPLES))
    monkeypatch.chdir(tmp_path)
    import params
    import exp0_nes

    RecordingTracker.created.clear()
    monkeypatch.setattr(exp0_nes, "GenerationTracker", RecordingTracker)
    monkeypatch.setattr(exp0_nes, "GENERATIONS", 5)

    curve, mu = exp0_nes.run_one_seed(42)

    tracker = RecordingTracker.created[0]
    assert tracker.kwargs["entity"] == params.ENTITY
    assert tracker.kwargs["project"] == params.PROJECT
    assert curve.size == 5
    assert mu.size == params.DIM
