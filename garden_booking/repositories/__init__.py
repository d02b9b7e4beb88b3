"""레포지토리 패키지 (데이터 접근 계층).

Repository package: data access layer.

Modules:
    base: 제네릭 CRUD 베이스 (Generic CRUD base repository)
    user_repository: 사용자 쿼리 (User queries)
    booking_repository: 예약 쿼리 및 집계 (Booking queries and aggregates)
    booking_store: 불변식을 강제하는 예약 저장소 (Invariant-enforcing booking store)
"""
