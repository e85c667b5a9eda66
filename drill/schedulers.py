"""Scheduler loading."""

import importlib.util
import pathlib

from drill import sm2


def load_scheduler(name: str, drill_dir: pathlib.Path, clock=None):
    sched_dir = drill_dir / "schedulers" / name
    sched_path = sched_dir / f"{name}.py"
    if not sched_path.exists():
        if name == sm2.Scheduler.scheduler_id:
            return sm2.Scheduler(clock=clock)
        raise FileNotFoundError(f"Scheduler not found: {sched_path}")
    spec = importlib.util.spec_from_file_location(f"drill_scheduler_{name}", str(sched_path))
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod.Scheduler(clock=clock)
