"""
Command-line interface for HN Companion
"""

import click
from bs4 import BeautifulSoup
from prettytable import PrettyTable

from .cache import time_ago
from .config import HN_ITEM_PAGE_URL
from .errors import describe_error
from .fetchers import HackerNewsAPI
from .models import EligibilityStatus
from .providers import available_providers, get_provider, list_ollama_models
from .settings import SettingsStore
from .summarizer import ThreadSummarizer
from .logging_config import setup_logging, get_logger


def _write_thread_table(thread, output_file):
    """Dump the reconciled thread as a table using prettytable."""
    table = PrettyTable()
    table.field_names = ["Path", "Score", "Replies", "Downvotes", "Author", "Comment"]
    table.align["Path"] = "l"
    table.align["Author"] = "l"
    table.align["Comment"] = "l"

    for comment in thread.comments.values():
        text = comment.text
        if len(text) > 60:
            text = text[:57] + "..."
        table.add_row([comment.path, comment.score, comment.replies, comment.downvotes, comment.author, text])

    click.echo(f"{thread.title} ({len(thread.comments)} comments)", file=output_file)
    click.echo(table.get_string(), file=output_file)


def _write_providers_table(settings, ollama_url, output_file):
    table = PrettyTable()
    table.field_names = ["Provider", "Class", "API key", "Model"]
    table.align = "l"

    selected = settings.get("providerSelection")
    for provider_id in available_providers():
        provider = get_provider(provider_id)
        name = f"{provider_id} *" if provider_id == selected else provider_id
        table.add_row([
            name,
            provider.provider_class.value,
            "required" if provider.requires_credential else "-",
            (settings.get(provider_id) or {}).get("model") or "-",
        ])

    click.echo(table.get_string(), file=output_file)
    click.echo("* selected in settings", file=output_file)

    models = list_ollama_models(url=ollama_url)
    if models:
        click.echo(f"Ollama models at {ollama_url}: {', '.join(models)}", file=output_file)
    else:
        click.echo(f"No Ollama models found at {ollama_url}", file=output_file)


def _write_user_table(username, user, output_file):
    table = PrettyTable()
    table.field_names = ["User", "Karma", "About"]
    table.align = "l"
    about = BeautifulSoup(user.about, "html.parser").get_text(" ", strip=True)
    table.add_row([username, user.karma, about])
    click.echo(table.get_string(), file=output_file)


def _write_summary(result, output_format, output_file):
    text = result.export_text()
    discussion_url = HN_ITEM_PAGE_URL.format(result.item_id)

    if output_format == "markdown":
        title = result.thread.title if result.thread is not None else f"item {result.item_id}"
        click.echo(f"# Discussion Summary: {title}\n", file=output_file)
        click.echo(text, file=output_file)
        click.echo("", file=output_file)
        click.echo(f"- [HN Discussion]({discussion_url})", file=output_file)
        if result.from_cache:
            click.echo(f"- Cached summary from {time_ago(result.cached_at)} ago", file=output_file)
        else:
            click.echo(f"- Generated by {result.provider_id}/{result.model_id or '-'} "
                       f"in {result.duration:.1f}s", file=output_file)
        return

    click.echo("=" * 60, file=output_file)
    click.echo(text, file=output_file)
    click.echo("=" * 60, file=output_file)
    click.echo(f"HN Discussion: {discussion_url}", file=output_file)


@click.command()
@click.argument("item_id", type=int, required=False)
@click.option(
    "--provider",
    "-p",
    type=click.Choice(available_providers()),
    default=None,
    help="AI provider to use (default: from settings)",
)
@click.option(
    "--model",
    "-m",
    type=str,
    default=None,
    help="Model to use with the provider (default: from settings)",
)
@click.option(
    "--api-key",
    type=str,
    default=None,
    help="API key for the provider (default: from settings or <PROVIDER>_API_KEY)",
)
@click.option(
    "--ollama-url",
    type=str,
    default=None,
    help="Ollama server URL (default: from settings)",
)
@click.option(
    "--no-cache",
    is_flag=True,
    default=False,
    help="Ignore the cached summary and generate a fresh one",
)
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Settings file (default: ~/.config/hn-companion/settings.json)",
)
@click.option(
    "--show-thread",
    is_flag=True,
    default=False,
    help="Show the reconciled thread as a table instead of summarizing it",
)
@click.option(
    "--list-providers",
    is_flag=True,
    default=False,
    help="List the available AI providers and exit",
)
@click.option(
    "--user",
    "username",
    type=str,
    default=None,
    help="Show a Hacker News user's karma and about text and exit",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default=None,
    help="Output file (default: stdout)",
)
@click.option(
    "--output-format",
    type=click.Choice(["text", "markdown"]),
    default="text",
    help="Output format (default: text)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="WARNING",
    help="Set logging level (default: WARNING)",
)
@click.option(
    "--log-file",
    type=click.Path(),
    default=None,
    help="Also write the log to this file",
)
def main(item_id, provider, model, api_key, ollama_url, no_cache, settings_path,
         show_thread, list_providers, username, output, output_format, log_level, log_file):
    """Summarize the discussion of a Hacker News item (story or comment)"""
    setup_logging(level=log_level, log_file=log_file)
    logger = get_logger(__name__)

    store = SettingsStore(settings_path)
    settings = store.get()

    if list_providers:
        url = ollama_url or (settings.get("ollama") or {}).get("url")
        _write_providers_table(settings, url, click.get_text_stream("stdout"))
        return

    if username:
        user = HackerNewsAPI().get_user(username)
        _write_user_table(username, user, click.get_text_stream("stdout"))
        return

    if item_id is None:
        raise click.UsageError("Missing argument 'ITEM_ID'.")

    logger.info(f"Starting HN Companion - item: {item_id}, provider: {provider or settings.get('providerSelection')}")

    output_file = click.open_file(output or "-", "w")
    if output:
        logger.info(f"Writing output to: {output}")

    try:
        summarizer = ThreadSummarizer(settings_store=store, settings=settings)

        if show_thread:
            thread = summarizer.get_thread(item_id)
            if thread is None:
                click.echo(f"Error: could not load thread {item_id}", err=True)
                raise click.Abort()
            _write_thread_table(thread, output_file)
            return

        click.echo(f"Summarizing discussion of item {item_id}...", err=True)
        result = summarizer.summarize(
            item_id,
            skip_cache=no_cache,
            provider_id=provider,
            model_id=model,
            credential=api_key,
            base_url=ollama_url,
        )

        if not result.succeeded:
            message = describe_error(result.error_kind, result.error_message, result.provider_id)
            click.echo(f"Error: {message.title}", err=True)
            if result.eligibility != EligibilityStatus.OK:
                click.echo(result.error_message, err=True)
            else:
                click.echo(message.description, err=True)
            if message.hint:
                click.echo(f"Hint: {message.hint}", err=True)
            raise click.Abort()

        _write_summary(result, output_format, output_file)
        logger.info("HN Companion completed successfully")
    finally:
        if output:
            output_file.close()


if __name__ == "__main__":
    main()
