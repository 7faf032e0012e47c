import asyncio
import os
from typing import Annotated

from pydantic import Field

from hosted_agent_lib import (
    AgentConfig,
    AgentRunner,
    ClientSettings,
    HostedAgentClient,
    HostedToolRegistry,
    LLMConfig,
    setup_logging,
)

registry = HostedToolRegistry()


@registry.tool
def get_weather(
    city: Annotated[str, Field(description="The city to get the weather for")],
    unit: Annotated[str, Field(description="celsius or fahrenheit")] = "celsius",
) -> str:
    """Get the current weather in a given city."""
    return f"It is 21 degrees {unit} and sunny in {city}."


async def main() -> None:
    """
    Provision an agent with a local weather tool and chat with it from the CLI.
    """
    setup_logging()
    print("Welcome to the CLI Agent!")

    try:
        settings = ClientSettings.from_env()
    except ValueError as e:
        print(f"Error: {e}")
        return

    openai_key = os.getenv("OPENAI_API_KEY")
    if not openai_key:
        print("Error: OPENAI_API_KEY not found in environment variables.")
        return

    async with HostedAgentClient(settings) as client:
        runner = AgentRunner(client, registry)
        await runner.provision(
            LLMConfig(provider="OPENAI", api_key=openai_key),
            AgentConfig(
                name="Weather assistant",
                description="Answers weather questions",
                prompt="You are a helpful assistant. Use the get_weather tool for weather questions.",
            ),
        )

        session_id = None
        print("\nStart chatting! Type 'exit' or 'quit' to stop.")
        try:
            while True:
                user_input = input("\nYou: ").strip()
                if user_input.lower() in ["exit", "quit"]:
                    print("Goodbye!")
                    break

                if not user_input:
                    continue

                try:
                    result = await runner.run(user_input, session_id=session_id)
                except Exception as e:
                    print(f"An error occurred: {e}")
                    continue

                session_id = result.session_id
                for tool_result in result.tool_results:
                    print(f"[{tool_result.name}] {tool_result.response}")
                print(f"Agent: {result.output}")
        finally:
            await runner.teardown()


if __name__ == "__main__":
    asyncio.run(main())
