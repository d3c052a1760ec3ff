import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Sequence

import httpx

from app.services import leetcode

log = logging.getLogger(__name__)

SOURCE_FULL = "full"
SOURCE_RECENT = "recent"

FetchSlugs = Callable[[httpx.AsyncClient, str], Awaitable[set[str]]]


@dataclass(frozen=True)
class HistoryProvider:
    name: str
    fetch: FetchSlugs


# Preference order: paginated GraphQL first, then the public REST dump.
PROVIDERS: tuple[HistoryProvider, ...] = (
    HistoryProvider("graphql", leetcode.fetch_accepted_slugs_graphql),
    HistoryProvider("public_api", leetcode.fetch_accepted_slugs_public),
)


def dedupe_slugs(slugs: Iterable[Any] | None) -> set[str]:
    if not slugs:
        return set()
    return {str(slug).strip() for slug in slugs if slug and str(slug).strip()}


async def first_available(
    client: httpx.AsyncClient,
    username: str,
    providers: Sequence[HistoryProvider],
) -> tuple[str, set[str]] | None:
    """
    Run providers in order and return ``(name, slugs)`` for the first one
    that produces a non-empty set. Failures are logged and skipped.
    """
    for provider in providers:
        try:
            slugs = dedupe_slugs(await provider.fetch(client, username))
        except Exception as exc:
            log.warning("History provider %s failed for %s: %s", provider.name, username, exc)
            continue
        if slugs:
            return provider.name, slugs
        log.info("History provider %s returned nothing for %s", provider.name, username)
    return None


def wants_full_history(payload: dict[str, Any]) -> bool:
    return payload.get("responseFormat") == "v2" or payload.get("includeFullHistory") is True


async def collect_solved(
    client: httpx.AsyncClient,
    username: str,
    full: bool,
    providers: Sequence[HistoryProvider] = PROVIDERS,
) -> list[dict] | dict[str, Any]:
    """
    Build the response body for ``username``.

    The recent-submissions fetch is mandatory and its errors propagate. With
    ``full`` unset the recent list is returned as-is for older clients.
    """
    recent = await leetcode.fetch_recent_submissions(client, username)
    if not full:
        return recent

    found = await first_available(client, username, providers)
    if found:
        provider_name, slugs = found
        source = SOURCE_FULL
        log.info("Full history for %s from %s: %d slugs", username, provider_name, len(slugs))
    else:
        slugs = dedupe_slugs(sub["titleSlug"] for sub in recent)
        source = SOURCE_RECENT
        log.info("Full history unavailable for %s, using %d recent slugs", username, len(slugs))

    all_solved = sorted(slugs)
    return {
        "source": source,
        "recentSolved": recent,
        "allSolvedSlugs": all_solved,
        "counts": {
            "recentSolved": len(recent),
            "allSolved": len(all_solved),
        },
    }
