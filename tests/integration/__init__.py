"""Integration tests for AvaTax client.

These tests run against the AvaTax sandbox API and require valid credentials.

Setup:
    1. Set environment variables (via .env.integration or otherwise):
       - AVATAX_SANDBOX_USERNAME
       - AVATAX_SANDBOX_PASSWORD
       - AVATAX_SANDBOX_COMPANY_CODE (optional)

    2. Run integration tests:
       pytest tests/integration -m integration
"""
