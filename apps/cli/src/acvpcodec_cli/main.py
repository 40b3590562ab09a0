
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

import typer

from acvpcodec import AcvpError, classify, hex2bin, settings
from acvpcodec.algorithms import names_by_family
from .runners import get_engine, load_request, seeded_random, solve

app = typer.Typer(add_completion=False, help="ACVP vector codec CLI")

log = logging.getLogger(__name__)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log decode details to stderr."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def list_algos():
    """List the algorithm names the codec recognises, grouped by family."""
    for family, names in names_by_family().items():
        typer.echo(f"{family.value}:")
        for name in names:
            typer.echo(f"- {name}")


@app.command()
def inspect(path: Path = typer.Argument(..., exists=True, dir_okay=False, help="ACVP request JSON")):
    """Decode a vector set and summarise its groups."""
    try:
        request = load_request(path)
    except AcvpError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"algorithm: {request.algorithm} ({classify(request.algorithm).value})")
    typer.echo(f"vsId: {request.vsid}  revision: {request.revision}  sample: {request.is_sample}")
    for group in request.testgroups:
        ctx = group.context
        typer.echo(
            f"- tgId {group.tgid}: {group.test_type.value} "
            f"direction={ctx.direction.value or '-'} tests={len(group)}"
        )


@app.command()
def respond(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="ACVP request JSON"),
    engine: Optional[str] = typer.Option(None, help="Engine name (default: $ACVPCODEC_ENGINE or cryptography)."),
    pretty: bool = typer.Option(True, "--pretty/--compact", show_default=True),
    seed: Optional[str] = typer.Option(None, help="Hex seed for reproducible internal IVs."),
):
    """Compute every test with an engine and print the response document."""
    try:
        random_bytes = seeded_random(hex2bin(seed)) if seed is not None else None
        request = load_request(path, random_bytes)
        chosen = get_engine(engine or settings.default_engine())
        tally = solve(request, chosen)
        if tally.unsupported:
            typer.echo(
                f"error: {tally.unsupported}/{tally.cases} tests unsupported by engine '{chosen.name}'",
                err=True,
            )
            for example in tally.unsupported_examples:
                typer.echo(f"  tgId {example['tgId']} tcId {example['tcId']}: {example['reason']}", err=True)
            raise typer.Exit(code=1)
        log.debug("solved %d tests with %s", tally.solved, chosen.name)
        typer.echo(request.pretty_result() if pretty else request.dump_result())
    except AcvpError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)


def app_main():
    app()


if __name__ == "__main__":
    app_main()
