"""서비스 패키지 — 예약, 계정, 수용량 규칙 계층.

Service package — Business rules for pickups, accounts, stores and the
blocked-date calendar. Each module exposes a singleton; services flush
through repositories and leave the commit to the calling router.
"""
