#!/usr/bin/env python3
from pathlib import Path
from typing import Any, Optional, TextIO

import click
from rich.console import Console

from .config import DEFAULT_CONFIG_FILENAME, Config, ConfigurationError
from .core import Inspector, strip_comments
from .observers import ConsoleReportObserver, FileLogObserver

console = Console()


class InspectionFailed(click.ClickException):
    """Raised when the message has violations and failures are not suppressed."""

    exit_code = 1

    def __init__(self, count: int):
        super().__init__(f"The commit message has {count} violation(s).")


def read_message(message: Optional[str], message_file: Optional[TextIO], strip: bool) -> str:
    """Resolve the message text from exactly one of the two sources."""
    if message is not None and message_file is not None:
        raise click.UsageError("Pass either --message or MESSAGE_FILE, not both.")
    if message is None and message_file is None:
        raise click.UsageError("Missing the commit message: pass --message or MESSAGE_FILE.")

    if message is not None:
        text = message
    else:
        try:
            text = message_file.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Could not read the commit message from {message_file.name}: {e}") from e
    return strip_comments(text) if strip else text


def print_config(config: Config, config_path: Path) -> None:
    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path.exists():
        console.print(f"[dim]Config file: {config_path.as_posix()}[/dim]")
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    console.print(f"\n{'Setting':<26} {'Value':<20} {'Source':<10}")
    console.print("-" * 56)

    def print_setting(name: str, value: Any):
        source = "set" if name in config.model_fields_set else "default"
        console.print(f"{name:<26} {str(value):<20} {source:<10}", markup=False)

    for name in Config.model_fields:
        value = getattr(config, name)
        print_setting(name, "None" if value is None else value)

    console.print(
        f"\nTo modify these settings, create or edit {DEFAULT_CONFIG_FILENAME} in your repository root"
    )


@click.command()
@click.argument(
    "message_file",
    required=False,
    type=click.File("r", encoding="utf-8"),
)
@click.option("-m", "--message", help="Commit message to check (instead of MESSAGE_FILE)")
@click.option(
    "--additional-verbs",
    help="Extra imperative verbs separated by newlines, commas or semicolons",
)
@click.option(
    "--path-to-additional-verbs",
    help="Path to a file listing extra imperative verbs in the same format",
)
@click.option(
    "--allow-one-liners",
    is_flag=True,
    help="Accept messages consisting only of a subject line",
)
@click.option(
    "--enforce-sign-off",
    is_flag=True,
    help="Require a 'Signed-off-by:' line in the body",
)
@click.option(
    "--dont-throw",
    is_flag=True,
    help="Report violations but exit successfully",
)
@click.option(
    "--max-subject-length",
    type=click.IntRange(min=1),
    help="Maximum length of the subject line (overrides config setting)",
)
@click.option(
    "--max-body-line-length",
    type=click.IntRange(min=1),
    help="Maximum length of a body line (overrides config setting)",
)
@click.option(
    "--strip-comments",
    "strip",
    is_flag=True,
    help="Ignore '#' comment lines and everything below git's scissors line",
)
@click.option(
    "-p",
    "--path",
    default=".",
    help="Directory holding the config file (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log inspections to (overrides config setting)",
)
@click.option(
    "--config-list", is_flag=True, help="Display current configuration settings"
)
@click.option(
    "--config-init",
    is_flag=True,
    help="Create a config file with the current settings",
)
@click.option("--version", is_flag=True, help="Display version information and exit")
def main(
    message_file: Optional[TextIO],
    message: Optional[str],
    additional_verbs: Optional[str],
    path_to_additional_verbs: Optional[str],
    allow_one_liners: bool,
    enforce_sign_off: bool,
    dont_throw: bool,
    max_subject_length: Optional[int],
    max_body_line_length: Optional[int],
    strip: bool,
    path: Path,
    log_file: Optional[Path],
    config_list: bool,
    config_init: bool,
    version: bool,
):
    """
    Check a commit message against an opinionated style policy.

    The message is read from MESSAGE_FILE ('-' for stdin) or given with
    --message. The subject must be separated from the body by an empty
    line, fit 50 characters, start with a capitalized verb in imperative
    mood and not end with a dot. Body lines must fit 72 characters unless
    they hold only a URL.

    Configuration can be set in .opinionatedcommit.toml in the repository
    root. Command line options override configuration file settings.
    """
    try:
        if version:
            from .version import display_version_info

            display_version_info(console)
            return

        repo_path = path.absolute()
        config = Config.load(repo_path)

        if config_list:
            print_config(config, repo_path / DEFAULT_CONFIG_FILENAME)
            return

        if config_init:
            config_path = repo_path / DEFAULT_CONFIG_FILENAME
            if config_path.exists():
                console.print(f"[yellow]Config file already exists:[/yellow] {config_path}")
            else:
                config.save(repo_path)
                console.print(f"[green]Created config file:[/green] {config_path}")
            return

        # Command line options override config
        config = config.override(
            additional_verbs=additional_verbs,
            path_to_additional_verbs=path_to_additional_verbs,
            allow_one_liners=True if allow_one_liners else None,
            enforce_sign_off=True if enforce_sign_off else None,
            dont_throw=True if dont_throw else None,
            max_subject_length=max_subject_length,
            max_body_line_length=max_body_line_length,
        )

        text = read_message(message, message_file, strip)

        inspector = Inspector(config)
        inspector.add_observer(ConsoleReportObserver(console))

        log_file_path = log_file or config.get_log_file()
        if log_file_path:
            inspector.add_observer(FileLogObserver(str(log_file_path)))

        result = inspector.inspect(text)

        if not result.passed and config.fail_on_error:
            raise InspectionFailed(len(result.violations))
    except click.ClickException:
        raise
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        raise click.Abort()
    except Exception as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        raise click.Abort()


if __name__ == "__main__":
    main()
