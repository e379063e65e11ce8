from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from openform.gateway.exceptions import FormNotFoundError
from openform.player.controller import NavigationController

if TYPE_CHECKING:
    from openform.config.settings import PlayerConfig
    from openform.events.dispatcher import EventDispatcher
    from openform.gateway.protocol import FileStorage, FormRepository, SubmissionGateway

logger = logging.getLogger(__name__)


def open_session(
    repository: FormRepository,
    slug: str,
    gateway: SubmissionGateway,
    storage: FileStorage | None = None,
    dispatcher: EventDispatcher | None = None,
    player: PlayerConfig | None = None,
) -> NavigationController | None:
    """Start a session for a published form, or return None if it cannot be played.

    Missing, draft and closed forms all look the same to a respondent.
    Connection failures are not swallowed.
    """
    try:
        form = repository.fetch_form(slug)
    except FormNotFoundError:
        logger.info("Form %r not found", slug)
        return None
    if not form.is_published:
        logger.info("Form %r is %s, not published", slug, form.status.value)
        return None
    return NavigationController(
        form,
        gateway,
        dispatcher=dispatcher,
        storage=storage,
        player=player,
    )
