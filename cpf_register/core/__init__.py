"""Core registration flow.

Architecture:
- errors.py: Typed exceptions for the registration pipeline
- models.py: Request, directory account and outcome records
- payload_mapper.py: Inbound JSON -> DirectoryAccount
- token_client.py: Client-credentials token acquisition
- directory_client.py: Account creation and outcome classification
- registration_service.py: Linear pipeline with the single catch-all
"""
