"""
Services module for upstream clients and business logic.

This module organizes services into:
- core: Upstream API clients (API-Football, The Odds API)
- sync: Reference data sync, odds snapshot recording and team-name matching
- betting: Selection tracking and settlement
- auth_service: Email and Google sign-in
"""
