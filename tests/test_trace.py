"""Tests for CausalTrace: rebuilding call trees from parent_id links."""

from datetime import datetime, timedelta, timezone

from agentic.events.model import Event, EventType
from agentic.events.trace import CausalTrace

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _at(ms, event_type=EventType.LLM_CALL, **kwargs):
    return Event(event_type, timestamp=T0 + timedelta(milliseconds=ms), **kwargs)


def test_call_and_completion_form_a_tree():
    call = _at(0)
    done = _at(250, EventType.LLM_COMPLETION, parent_id=call.id)
    trace = CausalTrace([done, call])

    assert len(trace) == 2
    assert trace.roots() == [call]
    assert trace.children(call.id) == [done]
    assert trace.parent(done) == call
    assert trace.duration_ms(call) == 250.0
    assert trace.duration_ms(done) is None


def test_dangling_parent_is_a_root():
    orphan = _at(10, EventType.LLM_COMPLETION, parent_id="never-seen")
    trace = CausalTrace([orphan])
    assert trace.parent(orphan) is None
    assert trace.roots() == [orphan]
    assert "never-seen" not in trace


def test_children_ordered_by_timestamp():
    root = _at(0)
    late = _at(30, parent_id=root.id)
    early = _at(10, parent_id=root.id)
    trace = CausalTrace([root, late, early])
    assert trace.children(root.id) == [early, late]


def test_walk_is_depth_first():
    outer = _at(0)
    inner = _at(5, parent_id=outer.id)
    inner_done = _at(20, EventType.LLM_COMPLETION, parent_id=inner.id)
    outer_done = _at(30, EventType.LLM_COMPLETION, parent_id=outer.id)
    other = _at(40)

    trace = CausalTrace([other, outer_done, inner_done, inner, outer])
    assert [(d, e.id) for d, e in trace.walk()] == [
        (0, outer.id),
        (1, inner.id),
        (2, inner_done.id),
        (1, outer_done.id),
        (0, other.id),
    ]


def test_cycle_members_become_extra_roots():
    root = _at(0)
    a = _at(10, id="a", parent_id="b")
    b = _at(20, id="b", parent_id="a")
    trace = CausalTrace([b, a, root])

    assert trace.roots() == [root, a]
    assert [(d, e.id) for d, e in trace.walk()] == [(0, root.id), (0, "a"), (1, "b")]


def test_self_parented_event_is_not_hidden():
    loop = _at(5, id="loop", parent_id="loop")
    trace = CausalTrace([loop])

    assert trace.roots() == [loop]
    assert [(d, e.id) for d, e in trace.walk()] == [(0, "loop")]
    (node,) = trace.to_dict()["roots"]
    assert node["id"] == "loop"
    assert node["children"] == []


def test_get_and_contains():
    event = _at(0)
    trace = CausalTrace([event])
    assert trace.get(event.id) is event
    assert trace.get("missing") is None
    assert event.id in trace


def test_to_dict():
    call = _at(0)
    done = _at(100, EventType.LLM_COMPLETION, parent_id=call.id)
    data = CausalTrace([call, done]).to_dict()

    assert data["events"] == 2
    (root,) = data["roots"]
    assert root["id"] == call.id
    assert root["duration_ms"] == 100.0
    assert root["children"][0]["id"] == done.id
    assert root["children"][0]["type"] == "LLM_COMPLETION"
    assert root["children"][0]["children"] == []
