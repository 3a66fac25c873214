"""레포지토리 패키지 — 테이블별 쿼리 계층.

Repository package — One repository per table on top of BaseRepository.
Quota and capacity counters are changed here with conditional UPDATEs.
"""
