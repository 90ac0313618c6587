"""
Command-line interface for Pulse Tracker.

Provides the interactive tracking session and integrity status reporting.
"""

import typer

from pulse_tracker.infrastructure.parsers.record_parser import BACK_COMMAND, RecordParser
from pulse_tracker.infrastructure.storage.data_file import DataFile, LoadStatus
from pulse_tracker.services.record_store import RecordStore
from pulse_tracker.services.session import EXIT_COMMAND, Session
from pulse_tracker.utils.exceptions import TrackerError
from pulse_tracker.utils.logging_config import get_logger, setup_logging
from pulse_tracker.utils.parameters import ParameterLoader
from pulse_tracker.utils.validation import validate_user_name

app = typer.Typer(help="Pulse Tracker - Personal health and workout tracking")

logger = get_logger(__name__)


def init_config(config_path: str = "config/config.yaml") -> ParameterLoader:
    """
    Initialize configuration and logging.

    Args:
        config_path: Path to configuration file.

    Returns:
        Parameter loader instance.
    """
    param_loader = ParameterLoader(config_path)
    setup_logging(param_loader.get_logging_config(), "pulse_tracker")
    return param_loader


class TerminalInput:
    """
    Line input from the terminal.

    End of input does not abort the command: the prompt returns a stand-in
    answer and `closed` is set, so the session can wind down and save.
    """

    def __init__(self) -> None:
        self.closed = False

    def ask(self, text: str, on_close: str, prompt_suffix: str = ": ") -> str:
        if self.closed:
            return on_close
        try:
            return typer.prompt(text, prompt_suffix=prompt_suffix)
        except typer.Abort:
            logger.info("Input closed")
            self.closed = True
            return on_close

    def ask_station(self, text: str) -> str:
        """Station prompt; end of input discards the gym like 'back'."""
        return self.ask(text, BACK_COMMAND)


def ask_name(terminal: TerminalInput) -> str | None:
    """
    Prompt until a valid user name is entered.

    Returns:
        The name, or None if input ended first.
    """
    while True:
        answer = terminal.ask("What is your name?", "")
        if terminal.closed:
            return None
        try:
            return validate_user_name(answer)
        except TrackerError as e:
            typer.echo(f"Error: {e.message}")


@app.callback()
def main() -> None:
    """
    Track BMI, appointments, periods, runs and gym sessions.

    Data is kept in a local text file guarded by a SHA-256 hash file.
    """


@app.command()
def start(
    config_path: str = typer.Option("config/config.yaml", help="Path to configuration file"),
) -> None:
    """
    Start an interactive tracking session.

    Loads the data file (verifying its hash), runs commands until 'exit',
    then saves the data file and a fresh hash.
    """
    try:
        param_loader = init_config(config_path)
        storage_config = param_loader.get_storage_config()
        parser = RecordParser(param_loader.get_processing_config().timezone)
        data_file = DataFile(storage_config.data_file, storage_config.hash_file, parser)

        store = RecordStore()
        terminal = TerminalInput()
        status, name = data_file.load(store)
        if status == LoadStatus.CREATED or name is None:
            name = ask_name(terminal)
            if name is None:
                data_file.purge()
                typer.echo("No name entered. Nothing was saved.")
                return
            typer.echo(f"Welcome aboard, {name}!")
        else:
            typer.echo(f"Welcome back, {name}!")
        typer.echo("Type 'help' to view the available commands.")

        session = Session(store, parser, typer.echo, terminal.ask_station)
        while not terminal.closed:
            line = terminal.ask(">", EXIT_COMMAND, prompt_suffix=" ")
            if not session.handle(line):
                break

        data_file.save(name, store)
        typer.echo(f"Your data has been saved. Goodbye, {name}!")

    except TrackerError as e:
        logger.error(f"Session failed ({e.kind.value}): {e.message}")
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1) from e


@app.command()
def status(
    config_path: str = typer.Option("config/config.yaml", help="Path to configuration file"),
) -> None:
    """
    Show where data is stored and whether a saved store exists.

    Only reports file presence; the hash is verified when a session starts.
    """
    try:
        param_loader = init_config(config_path)
        storage_config = param_loader.get_storage_config()
        data_file = DataFile(storage_config.data_file, storage_config.hash_file)

        typer.echo(f"Data file: {data_file.data_path} ({_presence(data_file.data_path.exists())})")
        typer.echo(f"Hash file: {data_file.hash_path} ({_presence(data_file.hash_path.exists())})")

    except TrackerError as e:
        logger.error(f"Status failed: {e.message}")
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1) from e


def _presence(exists: bool) -> str:
    return "present" if exists else "missing"


if __name__ == "__main__":
    app()
