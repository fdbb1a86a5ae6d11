"""Closer CRM API - clients, meetings, payment proofs and notifications for sales closers"""
