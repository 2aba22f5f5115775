"""Shared CLI helpers and decorators."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Callable, TypeVar, overload

import click

from .config import AppConfig, load_config
from .exceptions import ConfigurationError, ParseError, TxnCliError
from .logging import Logger, configure_library_logging, get_logger

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(slots=True)
class CLIContext:
    """Runtime context shared across CLI invocations."""

    config: AppConfig
    dry_run: bool
    verbose: bool
    logger: Logger


pass_cli_context = click.make_pass_decorator(CLIContext)


@overload
def common_cli_options(func: F) -> F: ...


@overload
def common_cli_options(*, route_library_logs: bool = True) -> Callable[[F], F]: ...


def common_cli_options(
    func: F | None = None,
    *,
    route_library_logs: bool = True,
) -> F | Callable[[F], F]:
    """Decorator injecting shared CLI options and context creation.

    Usable bare (``@common_cli_options``) or with arguments
    (``@common_cli_options(route_library_logs=False)``).
    """

    def decorator(inner: F) -> F:
        @click.option("--config", "config_path", type=click.Path(path_type=str), help="Path to config file.")
        @click.option("--dry-run", is_flag=True, help="Summarise results without writing output files.")
        @click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
        @click.pass_context
        @functools.wraps(inner)
        def wrapper(
            ctx: click.Context,
            *args: Any,
            config_path: str | None = None,
            dry_run: bool = False,
            verbose: bool = False,
            **kwargs: Any,
        ) -> Any:
            try:
                app_config = load_config(config_path)
            except ConfigurationError as exc:
                raise click.ClickException(str(exc)) from exc

            logger = get_logger(verbose=verbose)
            if route_library_logs:
                configure_library_logging(verbose=verbose)

            cli_ctx = CLIContext(
                config=app_config,
                dry_run=dry_run,
                verbose=verbose,
                logger=logger,
            )
            ctx.obj = cli_ctx
            kwargs["cli_ctx"] = cli_ctx
            return inner(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    if func is not None:
        return decorator(func)
    return decorator


def handle_cli_errors(func: F) -> F:
    """Convert project exceptions into Click-friendly errors."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ConfigurationError as exc:
            raise click.ClickException(f"Configuration error: {exc}") from exc
        except ParseError as exc:
            raise click.ClickException(f"Parse error: {exc}") from exc
        except TxnCliError as exc:
            raise click.ClickException(str(exc)) from exc
        except click.ClickException:
            raise
        except Exception as exc:  # pragma: no cover
            raise click.ClickException(f"Unexpected error: {exc}") from exc

    return wrapper  # type: ignore[return-value]
