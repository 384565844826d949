"""Teaching-kernel building blocks: contexts, signals, tasks, sync and syscall dispatch."""

__version__ = "0.3.0"