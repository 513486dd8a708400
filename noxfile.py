import nox
from nox import options

options.sessions = ["tests", "format", "mypy"]


@nox.session
def tests(session):
    session.install("-e", ".[test]")
    session.run("pytest")


@nox.session
def mypy(session):
    session.install("mypy")
    session.run("mypy", "ante")


@nox.session
def format(session):
    session.install("isort")
    session.run("isort", "ante", "tests")


@nox.session(reuse_venv=True)
def docs(session):
    session.install("pdoc3")
    session.run("pdoc", "--html", "ante", "--force", "-o", "docs")
