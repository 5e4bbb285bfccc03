from backend.engine.scheduler.scheduler import (
    CancelToken,
    ManualScheduler,
    PollingScheduler,
    Scheduler,
)

__all__ = ["CancelToken", "ManualScheduler", "PollingScheduler", "Scheduler"]
