from invoke import task


@task
def lint(c):
    c.run("ruff check .")


@task
def format_check(c):
    c.run("ruff format --check .")


@task
def test(c):
    c.run("pytest")


@task
def pair_example(c):
    c.run("swiss-tournament pair examples/snapshot.yaml")


@task
def ci(c):
    lint(c)
    format_check(c)
    test(c)
