"""Default query pack per feed family and lane."""

from typing import Dict, List

# Google News RSS, English locale
GOOGLE_EN: Dict[str, List[str]] = {
    "uae_local": [
        '"Abu Dhabi" economy OR investment OR policy',
        '"Dubai" business OR economy OR government',
        "UAE government policy OR reform OR strategy",
        "ADNOC",
        "Mubadala investment",
        "ADIA investment",
        "ADQ acquisition OR investment",
        "G42 AI UAE",
        "Masdar renewable energy",
        "Emirates airline",
        "DP World logistics",
        "UAE AI data center",
        "Abu Dhabi sovereign wealth fund",
        "Dubai real estate market",
        "UAE fintech regulation VARA ADGM",
        "Abu Dhabi industrial strategy",
        "UAE cabinet decision",
        "Dubai Economic Agenda D33",
        "Abu Dhabi economic vision",
        "UAE diversification strategy",
        "ADIO Abu Dhabi investment office",
    ],
    "deal": [
        "ADGM venture fund",
        "Hub71 startup",
        "DIFC venture capital",
        "Dubai Future Foundation",
        "Abu Dhabi Finance Week ADFW",
        "VARA regulation crypto",
        "sovereign AI UAE",
        "UAE robotics",
        "UAE healthcare AI",
        "Stargate UAE data center",
        "dermocosmetics UAE",
        "medical tourism UAE",
        "Chalhoub Group beauty",
        "UAE stablecoin",
        "digital dirham",
        "CBDC UAE",
        "tokenization ADGM",
    ],
    "korea_uae": [
        '"Korea" "UAE" investment OR partnership OR MOU',
        '"Korean company" UAE',
        'KEPCO UAE OR "Abu Dhabi"',
        "Samsung Engineering UAE",
        'Hyundai UAE OR "Abu Dhabi"',
        '"K-beauty" UAE OR Dubai OR "Abu Dhabi"',
        '"K-pop" UAE OR Dubai concert',
        "Barakah nuclear Korea",
        "Korea UAE CEPA trade",
    ],
    "macro": [
        "UAE economic policy",
        "UAE regulation reform",
        "UAE foreign policy",
        "UAE central bank policy",
        "UAE interest rate",
        "UAE inflation",
    ],
}

# Naver Search API, Korean
NAVER_KO: Dict[str, List[str]] = {
    "deal": [
        "아부다비 국부펀드 투자",
        "무바달라 투자",
        "ADQ 투자",
        "ADIA 투자",
        "ADGM 펀드",
        "허브71",
        "UAE AI 데이터센터",
        "G42 아부다비",
        "UAE 로봇",
        "UAE K뷰티",
        "UAE 한국 화장품",
        "UAE 의료관광",
        "중동 K뷰티",
        "UAE 스테이블코인",
        "VARA 가상자산",
        "ADGM 토큰증권",
    ],
    "korea_uae": [
        "한국 UAE 투자 협력",
        "한국 기업 UAE 진출",
        "한국 UAE MOU 체결",
        "UAE 한국 스타트업 투자",
        "바라카 원전 한국",
        "한화 UAE",
        "삼성엔지니어링 UAE",
        "현대건설 UAE",
        "SK UAE",
        "K뷰티 중동 진출",
        "K팝 두바이 콘서트",
    ],
    "macro": [
        "UAE 경제정책",
        "UAE 산업정책",
        "UAE 규제 개편",
        "UAE 내각 결정",
        "두바이 D33",
        "아부다비 경제 비전",
        "UAE 중앙은행",
    ],
}

NOISE_TERMS: List[str] = [
    "luxury villa",
    "mortgage rate",
    "brent crude price",
    "football transfer",
    "cricket",
    "weather forecast",
    "visa application how to",
    "best restaurants",
    "hotel review",
]
