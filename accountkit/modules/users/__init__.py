"""
User Account Module

User data access and lifecycle notifications, with clear separation of concerns:
- domain: Domain models, events and errors
- repositories: Data access (store + repository)
- services: Billing, notifications and admin lifecycle
- api: Operation entry points and REST endpoints
"""
