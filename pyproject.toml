[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "skyler"
version = "0.1.0"
description = "Parser combinators with backtracking input, error reporting and syntax trees"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "parser",
    "parser-combinators",
    "ast",
    "syntax-tree",
    "repl",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
    "Topic :: Software Development :: Compilers",
    "Topic :: Text Processing :: General",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
skyler-hello = "skyler.hello:main"
skyler-prompt = "skyler.prompt:main"

[tool.hatch.build.targets.wheel]
packages = ["skyler"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
