"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- transactions: 거래 CRUD
- categories: 카테고리 관리
- summary: 예산/카테고리 요약
- currencies: 통화 카탈로그 및 기준 통화
- budget: 예산 설정
- imports: 은행 명세서 import
"""
