"""Notification domain - Per-user messages with a read flag"""
