"""
Football Data Sync Service

Mirrors API-Football reference data and records The Odds API prices.

Key components:
- Matchers: Correlate odds events with stored fixtures by team name
- Odds recorder: Append odds snapshots and mark closing lines
- Orchestrator: Coordinate sync jobs and metadata
"""
