"""Compiles resolved fallback entries into few-shot text for the planner."""

import logging

from supportbot.core.feedback.store import FallbackStore

logger = logging.getLogger(__name__)

_EXAMPLE_TEMPLATE = (
    "\nExample {index} (from past human correction):\n"
    'User Query: "{user_query}"\n'
    'AI\'s Initial Reply (Fallback): "{llm_reply}"\n'
    'Human Agent\'s Correction/Response: "{human_reply}"\n'
    'This indicates that for queries similar to "{user_query}", the correct '
    "approach is to provide the information or guidance as in the "
    '"Human Agent\'s Correction/Response".\n'
)


class FewShotExampleCompiler:
    """Renders human-corrected fallback entries as planner examples."""

    def __init__(self, store: FallbackStore):
        self._store = store

    def compile(self) -> str:
        """
        Build the example block.

        Returns:
            Concatenated examples, or an empty string when no entry has a
            human reply or the store cannot be read.
        """
        try:
            entries = self._store.list()
        except Exception as e:
            logger.error("Could not read fallback store for examples: %s", e)
            return ""

        resolved = [entry for entry in entries if entry.is_resolved]
        if not resolved:
            logger.debug("No resolved fallback entries to use as examples")
            return ""

        logger.info("Compiled %d few-shot examples from human corrections", len(resolved))
        return "".join(
            _EXAMPLE_TEMPLATE.format(
                index=index,
                user_query=entry.user_query,
                llm_reply=entry.llm_reply,
                human_reply=entry.human_reply,
            )
            for index, entry in enumerate(resolved, 1)
        )
