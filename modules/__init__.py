"""
Feature modules for the SkillSwap client.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for API payloads and client state
- service.py: Implementation against the SkillSwap API
- exceptions.py: Module-specific exceptions

Modules communicate through interfaces, not concrete implementations.
"""
