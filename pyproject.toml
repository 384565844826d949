[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tgkernel"
version = "0.3.0"
description = "Teaching-kernel building blocks: thread contexts, signals, task management, synchronization primitives and system-call dispatch."
requires-python = ">=3.10"
dependencies = []
keywords = ["kernel", "operating-system", "signals", "scheduler", "syscall", "mutex", "semaphore", "condvar"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System Kernels",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tgkernel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
