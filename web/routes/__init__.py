"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- auth: 로그인 / 게스트 / 로그아웃
- staff: 직원 관리
- payments: 급여 지급
- expenses: 시장 지출
- fund: 현금 장부 (분개, 잔액, 월별 집계, 정합 검사)
- dashboard: 대시보드 / 활동 로그 / 연간 집계
"""
