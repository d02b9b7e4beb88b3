"""서비스 패키지 (비즈니스 로직 계층).

Service package: business logic layer.

Modules:
    booking_service: 예약 집계, 권한 확인, 엑셀 내보내기 (Aggregation, ownership checks, Excel export)
    auth_service: 회원가입 및 로그인 (Registration and login)
"""
