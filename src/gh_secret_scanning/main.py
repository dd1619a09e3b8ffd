from __future__ import annotations

import asyncio
import sys
from typing import Annotated, List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from typer.main import get_command

from gh_secret_scanning.core.issues import create_issues, group_valid_alerts
from gh_secret_scanning.core.runner import fetch_alerts, run_verify
from gh_secret_scanning.errors import ConfigurationError, RetrievalError
from gh_secret_scanning.integrations.github import get_github_client
from gh_secret_scanning.models.alert import Alert
from gh_secret_scanning.models.config import Config, load_env
from gh_secret_scanning.models.run_params import RunParams
from gh_secret_scanning.ui.reporting import report_filename, write_csv_report
from gh_secret_scanning.ui.table import render_alerts
from gh_secret_scanning.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

cli = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help=("Interact with secret scanning alerts for a GHEC or GHES 3.7+ "
          "enterprise, organization, or repository"),
)

HostOpt = Annotated[Optional[str],
                    typer.Option("--url", "-u",
                                 help="GitHub host to connect to")]
EnterpriseOpt = Annotated[Optional[str],
                          typer.Option("--enterprise", "-e",
                                       help="GitHub enterprise slug")]
OrganizationOpt = Annotated[Optional[str],
                            typer.Option("--organization", "-o",
                                         help="GitHub organization slug")]
RepositoryOpt = Annotated[Optional[str],
                          typer.Option("--repository", "-r",
                                       help="GitHub owner/repository slug")]
ProviderOpt = Annotated[Optional[str],
                        typer.Option("--provider", "-p",
                                     help="Filter for a specific secret provider")]
LimitOpt = Annotated[Optional[int],
                     typer.Option("--limit", "-l",
                                  help="Limit the number of secrets processed")]
ShowSecretOpt = Annotated[bool,
                          typer.Option("--show-secret", "-s",
                                       help="Display secret values")]
CsvOpt = Annotated[bool,
                   typer.Option("--csv",
                                help="Generate a csv report of the results")]
VerboseOpt = Annotated[bool,
                       typer.Option("--verbose", "-v",
                                    help="Include additional secret alert fields")]
QuietOpt = Annotated[bool,
                     typer.Option("--quiet", "-q",
                                  help="Minimize output to the console")]
YesOpt = Annotated[bool,
                   typer.Option("--yes", "-y",
                                help="Do not ask before showing secrets")]


@cli.callback()
def root() -> None:
	"""
	Interact with secret scanning alerts.

	Select exactly one of --enterprise, --organization or --repository.
	"""
	return None


def _fail(console: Console, message: str) -> None:
	console.print(message, style="red", markup=False)
	raise typer.Exit(code=1)


def _build_params(**kwargs) -> RunParams:
	try:
		return RunParams(**kwargs)
	except ValidationError as exc:
		messages = "; ".join(err["msg"].removeprefix("Value error, ")
		                     for err in exc.errors())
		raise ConfigurationError(messages) from exc


def _write_csv(console: Console, config: Config, params: RunParams,
               alerts: List[Alert], show_secret: bool, validity: bool,
               verbose: bool) -> None:
	console.print("Generating CSV report...", style="blue")
	scope = params.scope if not params.provider else (
	    f"{params.scope} - {params.provider}")
	path = config.output_path / report_filename(scope)
	try:
		write_csv_report(path, alerts, limit=config.limit,
		                 show_secret=show_secret, validity=validity,
		                 verbose=verbose)
	except OSError as exc:
		logger.warning("unable to write CSV report %s: %s", path, exc)
		console.print(f"CSV report could not be written: {exc}",
		              style="yellow", markup=False)
		return
	console.print(f"CSV report generated: {path}", style="blue",
	              markup=False)


def run_impl(
    command: str,
    host: str | None = None,
    enterprise: str | None = None,
    organization: str | None = None,
    repository: str | None = None,
    provider: str | None = None,
    limit: int | None = None,
    show_secret: bool = False,
    csv_report: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    create_issues_flag: bool = False,
    assume_yes: bool = False,
) -> None:
	"""
	Run the alerts or verify pipeline and report the results.

	Configuration and retrieval errors exit with code 1; probe, CSV
	and issue failures are reported as warnings.

	Parameters:
		command: "alerts" or "verify".
		host: GitHub host override.
		enterprise: Enterprise slug.
		organization: Organization slug.
		repository: owner/repo slug.
		provider: Provider filter.
		limit: Maximum alerts to process.
		show_secret: Show secret values in the output.
		csv_report: Also write a CSV report.
		verbose: Include extended alert fields.
		quiet: Only print summaries.
		create_issues_flag: Open issues for repos with valid secrets.
		assume_yes: Skip the show-secret confirmation.
	"""
	load_env()
	console = Console()
	err_console = Console(stderr=True)
	try:
		config = Config()
	except ValidationError as exc:
		_fail(err_console, f"Invalid configuration: {exc}")
	configure_logging(config.log_level)
	try:
		params = _build_params(
		    enterprise=enterprise,
		    organization=organization,
		    repository=repository,
		    provider=provider,
		    host=host,
		    limit=limit,
		)
	except ConfigurationError as exc:
		_fail(err_console, str(exc))
	config.apply_overrides(params)

	if show_secret and not assume_yes:
		confirmed = typer.confirm(
		    "WARNING: --show-secret is enabled. Full secret values will be "
		    "displayed in PLAIN TEXT in the output. Continue?",
		    default=False,
		)
		if not confirmed:
			_fail(err_console, "Exiting...")

	api = get_github_client(config.github_token, host=config.host,
	                        timeout=config.request_timeout_seconds)
	validity = command == "verify"
	try:
		if validity:
			outcome = asyncio.run(run_verify(api, config, params))
			alerts = outcome.alerts
		else:
			alerts = fetch_alerts(api, config, params,
			                      include_secret=show_secret)
	except RetrievalError as exc:
		logger.debug("retrieval failed", exc_info=True)
		_fail(err_console,
		      f"ERROR: Unable to get alerts for {params.target}: {exc}")

	render_alerts(alerts, config.limit, console=console,
	              show_secret=show_secret, validity=validity,
	              verbose=verbose, quiet=quiet)
	if validity:
		if outcome.timed_out:
			console.print(
			    "Verification timed out; remaining alerts are unverified.",
			    style="yellow")
		console.print(
		    f"Confirmed {outcome.valid_count} valid secret alerts.",
		    style="blue")

	if alerts and csv_report:
		_write_csv(console, config, params, alerts, show_secret, validity,
		           verbose)

	if validity and create_issues_flag:
		issues = group_valid_alerts(alerts, host=config.host)
		if not issues:
			console.print("No valid secrets found, no issues created.",
			              style="blue")
			return
		created = asyncio.run(create_issues(issues))
		console.print(f"Created {created} of {len(issues)} issues.",
		              style="blue")


@cli.command()
def alerts(
    url: HostOpt = None,
    enterprise: EnterpriseOpt = None,
    organization: OrganizationOpt = None,
    repository: RepositoryOpt = None,
    provider: ProviderOpt = None,
    limit: LimitOpt = None,
    show_secret: ShowSecretOpt = False,
    csv: CsvOpt = False,
    verbose: VerboseOpt = False,
    quiet: QuietOpt = False,
    yes: YesOpt = False,
) -> None:
	"""Get secret scanning alerts for an enterprise, organization, or repository."""
	run_impl("alerts", host=url, enterprise=enterprise,
	         organization=organization, repository=repository,
	         provider=provider, limit=limit, show_secret=show_secret,
	         csv_report=csv, verbose=verbose, quiet=quiet, assume_yes=yes)


@cli.command()
def verify(
    url: HostOpt = None,
    enterprise: EnterpriseOpt = None,
    organization: OrganizationOpt = None,
    repository: RepositoryOpt = None,
    provider: ProviderOpt = None,
    limit: LimitOpt = None,
    show_secret: ShowSecretOpt = False,
    csv: CsvOpt = False,
    verbose: VerboseOpt = False,
    quiet: QuietOpt = False,
    yes: YesOpt = False,
    create_issues: bool = typer.Option(
        False,
        "--create-issues",
        "-c",
        help="Create issues in repos that contain verified secret alerts",
    ),
) -> None:
	"""Verify alerts for an enterprise, organization, or repository."""
	run_impl("verify", host=url, enterprise=enterprise,
	         organization=organization, repository=repository,
	         provider=provider, limit=limit, show_secret=show_secret,
	         csv_report=csv, verbose=verbose, quiet=quiet,
	         create_issues_flag=create_issues, assume_yes=yes)


def entrypoint(argv=None, *, standalone_mode: bool = True):
	"""
	Typer entrypoint.

	Parameters:
		argv: Command-line arguments. Defaults to sys.argv[1:].
		standalone_mode: If True, Click handles exit codes.

	Returns:
		Result of the Click application main invocation.
	"""
	args = sys.argv[1:] if argv is None else list(argv)
	_click_app = get_command(cli)
	return _click_app.main(
	    args=args,
	    prog_name="gh-secret-scanning",
	    standalone_mode=standalone_mode,
	)


if __name__ == "__main__":
	entrypoint()
