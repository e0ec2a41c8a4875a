[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bocchi"
version = "0.1.0"
description = "An asyncio OneBot 11 client and chat bot with pluggable command handlers"
requires-python = ">=3.10"
dependencies = [
    "websockets",
    "httpx",
]
keywords = ["onebot", "qq", "chat", "bot", "websocket", "asyncio"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Natural Language :: Chinese (Simplified)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
bocchi = "bocchi.app:main"

[tool.hatch.build.targets.wheel]
packages = ["bocchi"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
