import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]

# psycopg2 ships a C extension; a cached wheel may target another interpreter.
_C_EXT_PACKAGES = ["psycopg2-binary"]

nox.options.sessions = ["tests"]


def _install(session: nox.Session) -> None:
    """Install the storefront with its test dependencies."""
    session.run("poetry", "install", "--with", "test", "--all-extras", external=True)
    session.run("pip", "install", "--force-reinstall", "--no-cache-dir", *_C_EXT_PACKAGES)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Full suite on every supported Python."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_domain(session: nox.Session) -> None:
    """Aggregates, entities and pure helpers. No HTTP and no database."""
    _install(session)
    session.run("pytest", "-m", "domain", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_application(session: nox.Session) -> None:
    _install(session)
    session.run("pytest", "-m", "application or bdd", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_integration(session: nox.Session) -> None:
    """HTTP endpoints through the FastAPI TestClient."""
    _install(session)
    session.run("pytest", "-m", "integration", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_postgres(session: nox.Session) -> None:
    """Full suite against the production overlay in domain.toml (needs a running PostgreSQL)."""
    _install(session)
    session.run("pytest", "--env", "production", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def loadtest(session: nox.Session) -> None:
    """Headless Locust run against a storefront already serving on localhost:8000."""
    _install(session)
    session.run(
        "locust",
        "-f",
        "loadtests/locustfile.py",
        "--headless",
        "--host",
        "http://localhost:8000",
        "--users",
        "20",
        "--spawn-rate",
        "5",
        "--run-time",
        "1m",
        *session.posargs,
    )
