import asyncio

from llm_bridge.client import LLMClient
from llm_bridge.tool import Tool
from llm_bridge.types import Vendor


async def main() -> None:
    tool = (
        Tool.builder()
        .name("get_weather")
        .description("Get the current weather in a given location")
        .add_parameter("location", "string", "The city and state, e.g. San Francisco, CA", True)
        .add_enum_parameter("unit", "The unit of temperature", False, ["celsius", "fahrenheit"])
        .build()
    )

    # Rendering needs no network access
    for vendor in Vendor:
        client = LLMClient.create(vendor, api_key="DUMMY")
        request = (
            client.request()
            .user_message("What is the weather in San Francisco?")
            .system_prompt("You are a weather assistant.")
            .add_tool(tool)
        )
        print(vendor.value, request.render_json())
        await client.aclose()

    # A dummy key shows how vendor errors surface
    async with LLMClient.create(Vendor.ANTHROPIC, api_key="DUMMY") as client:
        try:
            await client.request().user_message("Hello, Claude!").send()
        except Exception as e:
            print("Expected error:", type(e).__name__, e)


if __name__ == "__main__":
    asyncio.run(main())
