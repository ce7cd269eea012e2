import asyncio
import json
import math
import random
import unittest
from typing import Any

import httpx

from llm_bridge.errors import InvalidUsage, MissingMessages
from llm_bridge.providers.anthropic import AnthropicProvider
from llm_bridge.providers.base import BaseProvider
from llm_bridge.providers.openai import OpenAIProvider
from llm_bridge.request import RequestBuilder
from llm_bridge.tool import Tool
from llm_bridge.types import Message

_ANTHROPIC_REPLY = {
    "id": "msg_1",
    "type": "message",
    "role": "assistant",
    "model": "claude-3-haiku-20240307",
    "content": [{"type": "text", "text": "Hi!"}],
    "stop_reason": "end_turn",
    "stop_sequence": None,
    "usage": {"input_tokens": 12, "output_tokens": 4},
}


def _providers() -> list[BaseProvider]:
    return [AnthropicProvider(api_key="test"), OpenAIProvider(api_key="test")]


def _tool() -> Tool:
    return (
        Tool.builder()
        .name("get_weather")
        .description("Get the current weather in a given location")
        .add_parameter("location", "string", "The city and state", True)
        .build()
    )


class AnthropicRenderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.provider = AnthropicProvider(api_key="test")

    def test_defaults(self) -> None:
        document = RequestBuilder(self.provider).user_message("Hello, Claude!").render_request()
        self.assertEqual(
            document,
            {
                "model": "claude-3-haiku-20240307",
                "messages": [{"role": "user", "content": "Hello, Claude!"}],
                "max_tokens": 100,
                "temperature": 0.0,
                "system": "",
            },
        )

    def test_system_prompt_is_top_level(self) -> None:
        document = (
            RequestBuilder(self.provider)
            .user_message("Hello")
            .system_prompt("You are a haiku assistant.")
            .render_request()
        )
        self.assertEqual(document["system"], "You are a haiku assistant.")
        self.assertTrue(all(m["role"] != "system" for m in document["messages"]))

    def test_explicit_values(self) -> None:
        document = (
            RequestBuilder(self.provider)
            .model("claude-3-opus-20240229")
            .user_message("one")
            .user_message("two")
            .max_tokens(1024)
            .temperature(0.7)
            .render_request()
        )
        self.assertEqual(document["model"], "claude-3-opus-20240229")
        self.assertEqual([m["content"] for m in document["messages"]], ["one", "two"])
        self.assertEqual(document["max_tokens"], 1024)
        self.assertEqual(document["temperature"], 0.7)

    def test_tools(self) -> None:
        tool = _tool()
        document = RequestBuilder(self.provider).user_message("Weather?").add_tool(tool).render_request()
        self.assertEqual(document["tools"], [tool.to_anthropic_format()])

    def test_no_tools_key_without_tools(self) -> None:
        document = RequestBuilder(self.provider).user_message("hi").render_request()
        self.assertNotIn("tools", document)


class OpenAIRenderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.provider = OpenAIProvider(api_key="test")

    def test_defaults(self) -> None:
        document = RequestBuilder(self.provider).user_message("Hello, GPT!").render_request()
        self.assertEqual(
            document,
            {
                "model": "gpt-4o",
                "messages": [{"role": "user", "content": "Hello, GPT!"}],
                "max_tokens": 100,
                "temperature": 0.0,
            },
        )

    def test_system_prompt_appended_last(self) -> None:
        document = (
            RequestBuilder(self.provider)
            .system_prompt("You are a haiku assistant.")
            .user_message("first")
            .assistant_message("reply")
            .user_message("second")
            .render_request()
        )
        self.assertNotIn("system", document)
        self.assertEqual(
            document["messages"],
            [
                {"role": "user", "content": "first"},
                {"role": "assistant", "content": "reply"},
                {"role": "user", "content": "second"},
                {"role": "system", "content": "You are a haiku assistant."},
            ],
        )

    def test_empty_system_prompt_appends_nothing(self) -> None:
        document = RequestBuilder(self.provider).user_message("hi").system_prompt("").render_request()
        self.assertEqual(document["messages"], [{"role": "user", "content": "hi"}])

    def test_tools(self) -> None:
        tool = _tool()
        document = RequestBuilder(self.provider).user_message("Weather?").add_tool(tool).render_request()
        self.assertEqual(document["tools"], [tool.to_openai_format()])


class ValidationTests(unittest.TestCase):
    def test_missing_messages_for_every_vendor(self) -> None:
        for provider in _providers():
            with self.subTest(provider=provider.name):
                with self.assertRaises(MissingMessages):
                    RequestBuilder(provider).model("m").system_prompt("s").render_request()

    def test_empty_message_list_is_missing(self) -> None:
        with self.assertRaises(MissingMessages):
            RequestBuilder(OpenAIProvider(api_key="test")).messages([]).render_request()

    def test_non_finite_temperature(self) -> None:
        for provider in _providers():
            for value in (math.nan, math.inf, -math.inf):
                with self.subTest(provider=provider.name, value=value):
                    builder = RequestBuilder(provider).user_message("hi").temperature(value)
                    with self.assertRaises(InvalidUsage):
                        builder.render_request()

    def test_negative_max_tokens(self) -> None:
        builder = RequestBuilder(AnthropicProvider(api_key="test")).user_message("hi").max_tokens(-1)
        with self.assertRaises(InvalidUsage):
            builder.render_request()

    def test_temperature_too_large_for_a_float(self) -> None:
        for provider in _providers():
            with self.subTest(provider=provider.name):
                builder = RequestBuilder(provider).user_message("hi").temperature(10**400)
                with self.assertRaises(InvalidUsage):
                    builder.render_request()

    def test_integer_temperature_is_rendered_as_float(self) -> None:
        document = RequestBuilder(OpenAIProvider(api_key="test")).user_message("hi").temperature(1).render_request()
        self.assertEqual(document["temperature"], 1.0)
        self.assertIsInstance(document["temperature"], float)

    def test_non_integer_max_tokens(self) -> None:
        for value in (1.5, 100.0, True):
            with self.subTest(value=value):
                builder = RequestBuilder(AnthropicProvider(api_key="test")).user_message("hi").max_tokens(value)
                with self.assertRaises(InvalidUsage):
                    builder.render_request()

    def test_invalid_usage_raised_before_io(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=_ANTHROPIC_REPLY)

        provider = AnthropicProvider(api_key="test", transport=httpx.MockTransport(handler))
        builder = RequestBuilder(provider).user_message("hi").temperature(math.nan)
        with self.assertRaises(InvalidUsage):
            asyncio.run(builder.send())
        self.assertEqual(calls, [])


class RenderPropertyTests(unittest.TestCase):
    def test_finite_temperature_round_trips(self) -> None:
        rng = random.Random(1234)
        for provider in _providers():
            for _ in range(200):
                value = rng.uniform(-1e6, 1e6)
                document = RequestBuilder(provider).user_message("hi").temperature(value).render_request()
                self.assertEqual(document["temperature"], value)
                self.assertEqual(json.loads(json.dumps(document))["temperature"], value)

    def test_render_is_idempotent(self) -> None:
        rng = random.Random(99)
        for provider in _providers():
            for _ in range(100):
                builder = _random_builder(provider, rng)
                first = builder.render_json()
                second = builder.render_json()
                self.assertEqual(first, second)
                self.assertEqual(builder.render_request(), json.loads(first))

    def test_render_does_not_mutate_builder(self) -> None:
        provider = OpenAIProvider(api_key="test")
        builder = RequestBuilder(provider).user_message("hi").system_prompt("sys")
        builder.render_request()["messages"].append({"role": "user", "content": "injected"})
        builder.render_request()
        self.assertEqual(builder.params.messages, [Message.user("hi")])
        self.assertEqual(len(builder.render_request()["messages"]), 2)


def _random_builder(provider: BaseProvider, rng: random.Random) -> RequestBuilder:
    builder = RequestBuilder(provider)
    for i in range(rng.randint(1, 5)):
        if rng.random() < 0.7:
            builder.user_message(f"user {i} {rng.random()}")
        else:
            builder.assistant_message(f"assistant {i}")
    setters: list[tuple[str, Any]] = [
        ("model", f"model-{rng.randint(0, 9)}"),
        ("max_tokens", rng.randint(0, 4096)),
        ("temperature", rng.uniform(0.0, 2.0)),
        ("system_prompt", rng.choice(["", "Be brief.", "You are a poet."])),
    ]
    for name, value in setters:
        if rng.random() < 0.5:
            getattr(builder, name)(value)
    if rng.random() < 0.3:
        builder.add_tool(_tool())
    return builder


if __name__ == "__main__":
    unittest.main()
