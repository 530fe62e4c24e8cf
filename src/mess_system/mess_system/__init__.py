"""Mess attendance and billing package.

This package is organized by feature modules (menu, attendance, billing, ...)
with a thin Flask controller layer over service/repository layers. The
``engine`` module is the entry point for the reconciliation operations.
"""
