"""User domain - Authentication, accounts and Closer objective tracking"""
