"""Garden Booking: 정원 관리 주간 예약 서비스 (seasonal garden work-week booking service)."""
