"""Tests for the MCP JSON-RPC endpoint."""

import pytest


def rpc(client, method, params=None, request_id=1):
    response = client.post("/mcp", json={"jsonrpc": "2.0", "id": request_id, "method": method, "params": params or {}})
    assert response.status_code == 200
    return response.json()


class TestProtocol:

    def test_initialize(self, client):
        body = rpc(client, "initialize")
        assert body["id"] == 1
        assert body["result"]["protocolVersion"] == "2024-11-05"
        assert body["result"]["serverInfo"]["name"] == "advanced-timer-server"

    def test_ping(self, client):
        assert rpc(client, "ping")["result"] == {}

    def test_unknown_method(self, client):
        body = rpc(client, "timers/explode", request_id="abc")
        assert body["id"] == "abc"
        assert body["error"]["code"] == -32601

    def test_invalid_json(self, client):
        response = client.post("/mcp", content=b"{not json", headers={"content-type": "application/json"})
        assert response.status_code == 200
        assert response.json()["error"]["code"] == -32700

    def test_non_object_body(self, client):
        response = client.post("/mcp", json=[1, 2, 3])
        assert response.status_code == 200
        assert response.json()["error"]["code"] == -32600


class TestToolsList:

    def test_lists_three_tools(self, client):
        tools = rpc(client, "tools/list")["result"]["tools"]
        assert [t["name"] for t in tools] == ["startTimer", "controlTimer", "getTimerStatus"]

    def test_start_timer_schema(self, client):
        tools = {t["name"]: t for t in rpc(client, "tools/list")["result"]["tools"]}
        schema = tools["startTimer"]["inputSchema"]
        assert schema["type"] == "object"
        assert schema["required"] == ["durationSeconds"]
        assert schema["properties"]["durationSeconds"]["minimum"] == 1
        assert schema["properties"]["durationSeconds"]["maximum"] == 7200
        assert tools["startTimer"]["_meta"]["openai/outputTemplate"] == "ui://widget/timer.html"

    def test_control_timer_schema(self, client):
        tools = {t["name"]: t for t in rpc(client, "tools/list")["result"]["tools"]}
        schema = tools["controlTimer"]["inputSchema"]
        assert set(schema["required"]) == {"timerId", "action"}
        assert schema["properties"]["action"]["enum"] == ["pause", "resume", "stop"]

    def test_status_schema_has_no_arguments(self, client):
        tools = {t["name"]: t for t in rpc(client, "tools/list")["result"]["tools"]}
        assert tools["getTimerStatus"]["inputSchema"]["properties"] == {}


class TestResources:

    def test_list(self, client):
        resources = rpc(client, "resources/list")["result"]["resources"]
        assert resources[0]["uri"] == "ui://widget/timer.html"
        assert resources[0]["mimeType"] == "text/html+skybridge"

    def test_read_widget(self, client):
        contents = rpc(client, "resources/read", {"uri": "ui://widget/timer.html"})["result"]["contents"]
        assert 'id="timer-root"' in contents[0]["text"]

    def test_read_unknown(self, client):
        assert rpc(client, "resources/read", {"uri": "ui://widget/nope.html"})["error"]["code"] == -32601


class TestToolsCall:

    def test_start_control_status(self, client, store):
        started = rpc(client, "tools/call", {
            "name": "startTimer",
            "arguments": {"name": "Coffee Break", "durationSeconds": 300},
        })["result"]
        assert started["isError"] is False
        timer_id = started["structuredContent"]["timer"]["id"]

        controlled = rpc(client, "tools/call", {
            "name": "controlTimer",
            "arguments": {"timerId": timer_id, "action": "pause"},
        })["result"]
        assert controlled["structuredContent"]["success"] is True

        status = rpc(client, "tools/call", {"name": "getTimerStatus", "arguments": {}})["result"]
        assert status["structuredContent"]["activeTimers"][0]["status"] == "paused"

    def test_start_without_name_defaults(self, client):
        result = rpc(client, "tools/call", {"name": "startTimer", "arguments": {"durationSeconds": 30}})["result"]
        assert result["structuredContent"]["timer"]["name"] == "Timer 1"

    @pytest.mark.parametrize("duration", [0, 7201])
    def test_invalid_duration_is_tool_error(self, client, duration):
        result = rpc(client, "tools/call", {"name": "startTimer", "arguments": {"durationSeconds": duration}})["result"]
        assert result["isError"] is True
        assert result["structuredContent"]["errorKind"] == "InvalidDuration"

    def test_missing_arguments(self, client):
        result = rpc(client, "tools/call", {"name": "controlTimer"})["result"]
        assert result["structuredContent"]["errorKind"] == "InvalidAction"

    def test_unknown_tool(self, client):
        assert rpc(client, "tools/call", {"name": "launchRocket"})["error"]["code"] == -32601

    def test_tool_crash_becomes_internal_error(self, client, app, monkeypatch):
        def boom():
            raise RuntimeError("kaput")

        monkeypatch.setattr(app.state.command_service, "get_timer_status", boom)
        result = rpc(client, "tools/call", {"name": "getTimerStatus"})["result"]
        assert result["isError"] is True
        assert result["structuredContent"]["errorKind"] == "InternalError"
        assert result["structuredContent"]["error"] == "kaput"
