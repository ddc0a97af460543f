"""
Midtrans Client Test Suite

This package contains all tests for the Midtrans client including:
- Snap BI signature and header tests
- Snap BI requestor and flow tests
- Core, Snap and Iris endpoint routing tests
- Webhook router tests
"""
