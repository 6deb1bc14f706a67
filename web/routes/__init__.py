"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- ledger: 보고서, 계정, 분개, 무결성 점검
- sales: 매출 송장
- collections: 수금
- returns: 매출 반품/에누리
- backup: 스냅샷 내보내기/가져오기/저장
"""
