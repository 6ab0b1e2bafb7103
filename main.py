from typing import Optional

import typer

from config import LOG_LEVEL, PROMPT
from Osh.log import configure_logging
from Osh.shell import ShellContext, main_loop

app = typer.Typer(name="osh", help="A small UNIX shell: pipes, redirection, background jobs and !!", add_completion=False)


@app.command()
def run(
    prompt: str = typer.Option(PROMPT, "--prompt", help="Prompt printed before each line."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help=f"Log level (default {LOG_LEVEL})."),
) -> None:
    """Start the interactive shell."""
    configure_logging(log_level)
    status = main_loop(ShellContext(prompt=prompt))
    raise typer.Exit(code=status)


def main():
    app()


if __name__ == "__main__":
    main()
