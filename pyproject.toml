[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "keystrider"
version = "1.0.0"
description = "Typing speed test and keyboard training with lessons, user profiles, statistics and themes"
requires-python = ">=3.10"
keywords = ["typing", "typing-test", "wpm", "touch-typing", "keyboard", "training", "lessons"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "platformdirs",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
keystrider = "keystrider.app:main"

[tool.hatch.build.targets.wheel]
packages = ["keystrider"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
