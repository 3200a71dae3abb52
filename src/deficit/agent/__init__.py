"""JSON response envelope for scripted and agent use of the CLI."""

from deficit.agent.response import AgentResponse, create_response, error_response

__all__ = ["AgentResponse", "create_response", "error_response"]
