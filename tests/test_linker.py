import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from frame_slideshow.canvas import CanvasHost  # noqa: E402
from frame_slideshow.composer import SlideComposer  # noqa: E402
from frame_slideshow.config import TransitionSettings  # noqa: E402
from frame_slideshow.errors import LinkResolutionFailure  # noqa: E402
from frame_slideshow.linker import NavigationLinker  # noqa: E402
from frame_slideshow.models import EntryPoint, NavigateAction, Reaction, Slide, Trigger  # noqa: E402


def composed_slides(host: CanvasHost, page, count: int):
    slides = [
        Slide(x=index * 200, y=0, width=100, height=50, image_bytes=b"png%d" % index)
        for index in range(count)
    ]
    return SlideComposer(host).compose(slides, page)


def setup(count: int):
    host = CanvasHost()
    source = host.add_page("Source")
    page = host.create_page()
    return host, source, page, composed_slides(host, page, count)


def test_chain_links_each_slide_to_the_next():
    host, _, page, composed = setup(3)

    graph = NavigationLinker(host).link(composed, page)

    assert graph.edge_count == 2
    assert [(edge.source.index, edge.destination.index) for edge in graph.edges] == [(0, 1), (1, 2)]
    assert graph.walk() == composed
    assert composed[-1].node.reactions == []

    reaction = composed[0].node.reactions[0]
    assert reaction.trigger.type == "ON_CLICK"
    assert reaction.action.destination_id == composed[1].node.id
    assert reaction.action.navigation == "NAVIGATE"
    assert reaction.action.preserve_scroll_position is False
    assert reaction.action.transition.type == "SMART_ANIMATE"
    assert reaction.action.transition.easing.type == "EASE_OUT"
    assert reaction.action.transition.duration == 1


def test_single_entry_point_on_first_slide():
    host, _, page, composed = setup(3)
    graph = NavigationLinker(host).link(composed, page)

    assert graph.entry_points == [EntryPoint(node_id=composed[0].node.id, name="Start Slideshow")]
    assert page.flow_starting_points == graph.entry_points
    assert graph.start is composed[0]


def test_single_slide_has_entry_point_and_no_edges():
    host, _, page, composed = setup(1)
    graph = NavigationLinker(host).link(composed, page)

    assert graph.edge_count == 0
    assert len(graph.entry_points) == 1
    assert composed[0].node.reactions == []


def test_no_slides_produces_empty_graph_without_touching_host():
    host, source, page, composed = setup(0)
    graph = NavigationLinker(host).link(composed, page)

    assert graph.slides == []
    assert graph.entry_points == []
    assert page.flow_starting_points == []
    assert host.current_page() is source


def test_link_activates_destination_page():
    host, source, page, composed = setup(2)
    host.set_active_container(source)

    NavigationLinker(host).link(composed, page)

    assert host.current_page() is page


def test_host_rejects_destination_outside_active_page():
    host, source, page, composed = setup(2)
    host.set_active_container(source)
    reaction = Reaction(trigger=Trigger(), action=NavigateAction(destination_id=composed[1].node.id))

    with pytest.raises(LinkResolutionFailure):
        host.set_transitions(composed[0].node, [reaction])
    assert composed[0].node.reactions == []


def test_transition_settings_are_applied():
    host, _, page, composed = setup(2)
    settings = TransitionSettings(easing="LINEAR", duration=0.3, preserve_scroll_position=True)

    graph = NavigationLinker(host, entry_label="Go", transition=settings).link(composed, page)

    action = graph.edges[0].reaction.action
    assert action.transition.easing.type == "LINEAR"
    assert action.transition.duration == 0.3
    assert action.preserve_scroll_position is True
    assert graph.entry_points[0].name == "Go"


def test_graph_as_dict_lists_chain():
    host, _, page, composed = setup(2)
    graph = NavigationLinker(host).link(composed, page)

    data = graph.as_dict()

    assert data["page"] == page.id
    assert data["slides"] == [slide.node.id for slide in composed]
    assert data["edges"][0]["source"] == composed[0].node.id
    assert data["edges"][0]["destination"] == composed[1].node.id
    assert data["edges"][0]["reaction"]["action"]["transition"]["type"] == "SMART_ANIMATE"
