"""
Credit Ledger Service - Savings & Credit-Line Platform

A FastAPI-based service that holds savings accounts, runs the credit
lifecycle (request, approval, disbursement, repayment) and keeps an
immutable transaction ledger consistent with account and credit state.
"""

__version__ = "0.1.0"
