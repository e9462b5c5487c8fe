[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "labkit"
version = "0.1.0"
description = "Small runnable experiments on concurrency, hashing, networking, web APIs and databases"
requires-python = ">=3.10"
keywords = [
    "education",
    "concurrency",
    "threads",
    "consistent-hashing",
    "tcp",
    "flask",
    "mysql",
]
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
    "Topic :: Education",
]
dependencies = [
    "flask>=2.2",
    "pymysql>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
labkit-queues = "labkit.queues:main"
labkit-hashring = "labkit.hashring:main"
labkit-deadlock = "labkit.deadlock:main"
labkit-counter = "labkit.counter:main"
labkit-bench = "labkit.bench:main"
labkit-basics = "labkit.basics:main"
labkit-dbcalls = "labkit.dbcalls:main"
labkit-tcpserver = "labkit.tcpserver:main"
labkit-coinapi = "labkit.coinapi:main"
labkit-users = "labkit.users:main"

[tool.hatch.build.targets.wheel]
packages = ["labkit"]

[tool.hatch.build.targets.sdist]
include = ["labkit", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
