"""Keyword taxonomy for topical tagging and corpus categorization."""

from typing import Dict, List

# term -> topical tag; matched case-insensitively against title + summary
TOPIC_TAXONOMY: Dict[str, str] = {
    "mubadala": "sovereign-wealth",
    "adia": "sovereign-wealth",
    "adq": "sovereign-wealth",
    "sovereign wealth": "sovereign-wealth",
    "국부펀드": "sovereign-wealth",
    "무바달라": "sovereign-wealth",
    "g42": "ai",
    "artificial intelligence": "ai",
    "data center": "ai",
    "데이터센터": "ai",
    "stargate": "ai",
    "adnoc": "energy",
    "masdar": "energy",
    "renewable": "energy",
    "nuclear": "energy",
    "barakah": "energy",
    "원전": "energy",
    "real estate": "real-estate",
    "property": "real-estate",
    "부동산": "real-estate",
    "stablecoin": "digital-assets",
    "crypto": "digital-assets",
    "vara": "digital-assets",
    "tokeniz": "digital-assets",
    "digital dirham": "digital-assets",
    "스테이블코인": "digital-assets",
    "가상자산": "digital-assets",
    "fintech": "fintech",
    "adgm": "financial-centre",
    "difc": "financial-centre",
    "korea": "korea",
    "korean": "korea",
    "한국": "korea",
    "k-beauty": "k-culture",
    "k뷰티": "k-culture",
    "k-pop": "k-culture",
    "k팝": "k-culture",
    "cabinet": "governance",
    "regulation": "governance",
    "reform": "governance",
    "규제": "governance",
    "내각": "governance",
    "central bank": "monetary-policy",
    "interest rate": "monetary-policy",
    "inflation": "monetary-policy",
    "중앙은행": "monetary-policy",
    "airline": "aviation",
    "emirates": "aviation",
    "etihad": "aviation",
    "startup": "startups",
    "스타트업": "startups",
    "venture": "startups",
    "hub71": "startups",
}

# Category rules are checked in this order; first hit wins.
KOREA_TERMS: List[str] = [
    "korea", "korean", "한국", "kepco", "k-beauty", "k-pop", "k뷰티", "k팝",
    "hallyu", "한류", "cepa", "barakah", "바라카", "samsung", "삼성", "hanwha",
    "한화", "hyundai", "현대", "posco", "포스코", "doosan", "두산",
]
INVESTMENT_TERMS: List[str] = [
    "mubadala", "adia", "adq", "ihc", "mgx", "lunate", "sovereign wealth",
    "private equity", "venture", "fund", "acquisition", "stake", "portfolio",
    "investment", "투자",
]
INDUSTRY_TERMS: List[str] = [
    "adnoc", "masdar", "nuclear", "oil", "gas", "renewable", "energy", "g42",
    "data center", "stargate", "technology", "real estate", "construction",
    "infrastructure", "tourism", "aviation", "emirates", "etihad", "logistics",
    "dp world", "fintech", "healthcare",
]
POLITICS_TERMS: List[str] = [
    "diplomatic", "political", "royal", "government", "mbz", "sheikh",
    "tahnoun", "cabinet", "정치", "외교",
]
ECONOMY_TERMS: List[str] = [
    "gdp", "economy", "finance", "trade", "inflation", "currency",
    "central bank", "경제", "금융",
]
