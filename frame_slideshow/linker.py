"""Wire composed slides into a forward click-through chain."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from frame_slideshow.config import TransitionSettings
from frame_slideshow.host import SlideshowHost
from frame_slideshow.models import (
    ComposedSlide,
    EntryPoint,
    NavigateAction,
    NavigationEdge,
    NavigationGraph,
    Reaction,
    Trigger,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_ENTRY_LABEL = "Start Slideshow"


class NavigationLinker:
    """Attach an entry point and one click transition per non-terminal slide."""

    def __init__(
        self,
        host: SlideshowHost,
        *,
        entry_label: str = DEFAULT_ENTRY_LABEL,
        transition: Optional[TransitionSettings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.host = host
        self.entry_label = entry_label
        self.transition = transition or TransitionSettings()
        self.logger = logger or LOGGER

    def build_reaction(self, destination: ComposedSlide) -> Reaction:
        return Reaction(
            trigger=Trigger(type="ON_CLICK"),
            action=NavigateAction(
                destination_id=destination.node.id,
                navigation=self.transition.navigation,
                preserve_scroll_position=self.transition.preserve_scroll_position,
                transition=self.transition.to_spec(),
            ),
        )

    def link(self, composed: Sequence[ComposedSlide], page: Any) -> NavigationGraph:
        """Link ``composed`` in order; ``page`` must own every slide container.

        The page is made active before any edge is attached so destination
        ids resolve against it.
        """
        graph = NavigationGraph(page=page, slides=list(composed))
        if not composed:
            return graph

        self.host.set_active_container(page)

        entry = EntryPoint(node_id=composed[0].node.id, name=self.entry_label)
        self.host.set_entry_points(page, [entry])
        graph.entry_points = [entry]

        for index in range(len(composed) - 1):
            current = composed[index]
            following = composed[index + 1]
            reaction = self.build_reaction(following)
            self.host.set_transitions(current.node, [reaction])
            graph.edges.append(NavigationEdge(source=current, destination=following, reaction=reaction))

        self.logger.info(
            "Linked %s slide(s) with %s transition(s)",
            len(graph.slides),
            graph.edge_count,
        )
        return graph


__all__ = ["DEFAULT_ENTRY_LABEL", "NavigationLinker"]
