"""Mexican bank catalogue (SPEI institution codes)"""

from typing import Union

BANKS = {
    "002": "BANAMEX",
    "012": "BBVA BANCOMER",
    "014": "SANTANDER",
    "019": "BANJERCITO",
    "021": "HSBC",
    "030": "BAJIO",
    "032": "IXE",
    "036": "INBURSA",
    "037": "INTERACCIONES",
    "042": "MIFEL",
    "044": "SCOTIABANK",
    "058": "BANREGIO",
    "059": "INVEX",
    "060": "BANSI",
    "062": "AFIRME",
    "072": "BANORTE",
    "102": "THE ROYAL BANK",
    "103": "AMERICAN EXPRESS",
    "106": "BAMSA",
    "108": "TOKYO",
    "110": "JP MORGAN",
    "112": "BMONEX",
    "113": "VE POR MAS",
    "116": "CREDIT SUISSE",
    "124": "DEUTSCHE",
    "126": "CREDIT AGRICOLE",
    "127": "AZTECA",
    "128": "AUTOFIN",
    "129": "BARCLAYS",
    "130": "COMPARTAMOS",
    "131": "BANCO FAMSA",
    "132": "BMULTIVA",
    "133": "ACTINVER",
    "134": "WAL-MART",
    "135": "NAFIN",
    "136": "INTERBANCO",
    "137": "BANCOPPEL",
    "138": "ABC CAPITAL",
    "139": "UBS BANK",
    "140": "CONSUBANCO",
    "141": "VOLKSWAGEN",
    "143": "CIBANCO",
    "145": "BBASE",
    "147": "BANKAOOL",
    "148": "PAGATODO",
    "149": "INMOBILIARIO",
    "150": "DONDE",
    "151": "BANCREA",
    "152": "BANCO AHORRO FAMSA",
    "154": "BANCO COVALTO",
    "155": "ICBC",
    "156": "SABADELL",
    "157": "SHINHAN",
    "158": "MIZUHO BANK",
    "159": "BANCO S3",
    "160": "BANK OF CHINA",
    "166": "BANCO BICENTENARIO",
    "901": "STP",
    "902": "BANREGIO",
    "999": "OTRO BANCO",
}


def _normalize_code(code: Union[str, int]) -> str:
    return str(code).strip().zfill(3)


def bank_name(code: Union[str, int, None]) -> str:
    """Bank name for a code ('12' and '012' both resolve); unknown codes come back as-is"""
    if code is None or code == "":
        return ""
    return BANKS.get(_normalize_code(code), str(code))


def is_valid_bank(code: Union[str, int, None]) -> bool:
    if code is None or code == "":
        return False
    return _normalize_code(code) in BANKS


def bank_names() -> list[str]:
    """Distinct bank names in catalogue order, used as options of bank selectors"""
    return list(dict.fromkeys(BANKS.values()))


def format_bank_info(bank: str = "", account: str = "") -> str:
    if not bank and not account:
        return "No especificado"
    name = bank_name(bank) if bank else ""
    return f"{name} - {account}" if account else name
