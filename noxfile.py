import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]

nox.options.sessions = ["tests"]


def _install(session: nox.Session) -> None:
    """Install the package and its test extra through poetry."""
    session.run("poetry", "install", "--all-extras", external=True)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Full suite on every supported Python."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_domain(session: nox.Session) -> None:
    """In-process tests only: aggregate rules, cache policy, and BDD scenarios."""
    _install(session)
    session.run("pytest", "-m", "domain or bdd", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_integration(session: nox.Session) -> None:
    """Services, repository, and cache coherence against the configured store."""
    _install(session)
    session.run("pytest", "-m", "application or integration", *session.posargs)
