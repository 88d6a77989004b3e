[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "halkit"
version = "0.1.0"
description = "Thread-based building blocks: cancellable procs, blocking buffers, timers, worker pools, a readers-writer lock and a growable ring buffer"
requires-python = ">=3.10"
dependencies = []
keywords = ["threading", "buffer", "queue", "timer", "worker-pool", "rwlock", "ring-buffer", "concurrency"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
halkit-rwlock = "halkit.rwlock:main"
halkit-ringbuffer = "halkit.ringbuffer:main"
halkit-sorting = "halkit.sorting:main"

[tool.hatch.build.targets.wheel]
packages = ["halkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
