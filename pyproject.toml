[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tagwm"
version = "6.2.0"
description = "A tag-based tiling window manager model and a modular status line generator"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = [
    "window-manager",
    "tiling",
    "tags",
    "status-bar",
    "statusline",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: Window Managers",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tagwm = "tagwm.wm.bindings:main"
tagwm-status = "tagwm.status.bar:main"

[tool.hatch.build.targets.wheel]
packages = ["tagwm"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
