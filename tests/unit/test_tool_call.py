import anyio
import httpx  # type: ignore[import]
import pytest  # type: ignore[import]


pytestmark = pytest.mark.unit


def _run(client, arguments):
    from agentic_search_server_core import SearchToolCall

    call = SearchToolCall(client)
    outcome = anyio.run(call.run, arguments)
    return call, outcome


def _never_called(request):
    raise AssertionError("upstream must not be called")


def test_successful_call_walks_every_state(make_client):
    from agentic_search_server_core import ToolCallState

    payload = {
        "choices": [{"message": {"content": "Sunny, 21C"}}],
        "citations": ["https://wx.example/paris"],
    }
    client, upstream = make_client(lambda request: httpx.Response(200, json=payload))

    call, outcome = _run(client, {"query": "weather in Paris"})

    assert call.history == [
        ToolCallState.IDLE,
        ToolCallState.VALIDATING,
        ToolCallState.CALLING,
        ToolCallState.NORMALIZING,
        ToolCallState.RESPONDING,
    ]
    assert not outcome.is_error
    assert outcome.message is None
    assert len(outcome.parts) == 4
    assert outcome.parts[0].body == "Sunny, 21C\n\n**Sources:**\n- <https://wx.example/paris>"
    assert len(upstream.requests) == 1


@pytest.mark.parametrize(
    "arguments",
    [
        {"query": ""},
        {"query": "   "},
        {},
        {"query": 42},
        None,
    ],
)
def test_invalid_query_fails_before_calling_upstream(make_client, arguments):
    from agentic_search_server_core import ToolCallState

    client, upstream = make_client(_never_called)

    call, outcome = _run(client, arguments)

    assert outcome.is_error
    assert call.history == [ToolCallState.IDLE, ToolCallState.VALIDATING, ToolCallState.FAILED]
    assert len(outcome.parts) == 1
    assert "query" in outcome.message
    assert upstream.requests == []


def test_invalid_recency_filter_fails_before_calling_upstream(make_client):
    client, upstream = make_client(_never_called)

    _, outcome = _run(client, {"query": "news", "search_recency_filter": "year"})

    assert outcome.is_error
    assert "search_recency_filter" in outcome.message
    assert upstream.requests == []


def test_upstream_503_fails_after_one_attempt(make_client):
    from agentic_search_server_core import ToolCallState

    client, upstream = make_client(lambda request: httpx.Response(503, text="busy"))

    call, outcome = _run(client, {"query": "anything"})

    assert outcome.is_error
    assert call.history[-2:] == [ToolCallState.CALLING, ToolCallState.FAILED]
    assert "503" in outcome.message
    assert len(outcome.parts) == 1
    assert len(upstream.requests) == 1


def test_malformed_upstream_body_fails(make_client):
    client, _ = make_client(lambda request: httpx.Response(200, text="not json"))

    _, outcome = _run(client, {"query": "anything"})

    assert outcome.is_error
    assert "parsing API response" in outcome.message


def test_recency_filter_is_forwarded(make_client):
    client, upstream = make_client(lambda request: httpx.Response(200, json={}))

    _, outcome = _run(client, {"query": "markets", "search_recency_filter": "week"})

    assert not outcome.is_error
    assert upstream.json_bodies[0]["options"] == {"recency_filter": "week"}


def test_search_query_strips_whitespace():
    from agentic_search_server_core import parse_search_arguments

    query = parse_search_arguments({"query": "  hello  ", "search_recency_filter": None})

    assert query.query == "hello"
    assert query.search_recency_filter is None


def test_undecodable_upstream_body_fails_cleanly(make_client):
    from agentic_search_server_core import ToolCallState

    client, upstream = make_client(
        lambda request: httpx.Response(
            200, headers={"Content-Encoding": "gzip"}, stream=httpx.ByteStream(b"not gzip")
        )
    )

    call, outcome = _run(client, {"query": "x"})

    assert outcome.is_error
    assert call.state is ToolCallState.FAILED
    assert call.history[-2:] == [ToolCallState.CALLING, ToolCallState.FAILED]
    assert "parsing API response" in outcome.message
    assert len(upstream.requests) == 1
