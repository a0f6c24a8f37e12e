"""
Data models for the Investec Card SDK.

Request-side models are pydantic models so caller input is validated before
any network call. Response envelopes are TypedDicts: the client returns the
parsed JSON exactly as the API sent it, and these types only document the
shapes for type checkers and readers.
"""

from enum import Enum
from typing import Any, Optional, TypedDict, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Token endpoint -------------------------------------------------------


class AuthResponse(BaseModel):
    """Response from the identity endpoint (client-credentials grant)."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    scope: str = ""


# --- Simulation input -----------------------------------------------------


class CountryCode(str, Enum):
    """ISO 3166-1 alpha-2 country codes accepted by the simulation endpoint."""

    AF = "AF"
    AL = "AL"
    DZ = "DZ"
    AS = "AS"
    AD = "AD"
    AO = "AO"
    AI = "AI"
    AQ = "AQ"
    AG = "AG"
    AR = "AR"
    AM = "AM"
    AW = "AW"
    AU = "AU"
    AT = "AT"
    AZ = "AZ"
    BS = "BS"
    BH = "BH"
    BD = "BD"
    BB = "BB"
    BY = "BY"
    BE = "BE"
    BZ = "BZ"
    BJ = "BJ"
    BM = "BM"
    BT = "BT"
    BO = "BO"
    BQ = "BQ"
    BA = "BA"
    BW = "BW"
    BV = "BV"
    BR = "BR"
    IO = "IO"
    BN = "BN"
    BG = "BG"
    BF = "BF"
    BI = "BI"
    CV = "CV"
    KH = "KH"
    CM = "CM"
    CA = "CA"
    KY = "KY"
    CF = "CF"
    TD = "TD"
    CL = "CL"
    CN = "CN"
    CX = "CX"
    CC = "CC"
    CO = "CO"
    KM = "KM"
    CD = "CD"
    CG = "CG"
    CK = "CK"
    CR = "CR"
    HR = "HR"
    CU = "CU"
    CW = "CW"
    CY = "CY"
    CZ = "CZ"
    CI = "CI"
    DK = "DK"
    DJ = "DJ"
    DM = "DM"
    DO = "DO"
    EC = "EC"
    EG = "EG"
    SV = "SV"
    GQ = "GQ"
    ER = "ER"
    EE = "EE"
    SZ = "SZ"
    ET = "ET"
    FK = "FK"
    FO = "FO"
    FJ = "FJ"
    FI = "FI"
    FR = "FR"
    GF = "GF"
    PF = "PF"
    TF = "TF"
    GA = "GA"
    GM = "GM"
    GE = "GE"
    DE = "DE"
    GH = "GH"
    GI = "GI"
    GR = "GR"
    GL = "GL"
    GD = "GD"
    GP = "GP"
    GU = "GU"
    GT = "GT"
    GG = "GG"
    GN = "GN"
    GW = "GW"
    GY = "GY"
    HT = "HT"
    HM = "HM"
    VA = "VA"
    HN = "HN"
    HK = "HK"
    HU = "HU"
    IS = "IS"
    IN = "IN"
    ID = "ID"
    IR = "IR"
    IQ = "IQ"
    IE = "IE"
    IM = "IM"
    IL = "IL"
    IT = "IT"
    JM = "JM"
    JP = "JP"
    JE = "JE"
    JO = "JO"
    KZ = "KZ"
    KE = "KE"
    KI = "KI"
    KP = "KP"
    KR = "KR"
    KW = "KW"
    KG = "KG"
    LA = "LA"
    LV = "LV"
    LB = "LB"
    LS = "LS"
    LR = "LR"
    LY = "LY"
    LI = "LI"
    LT = "LT"
    LU = "LU"
    MO = "MO"
    MG = "MG"
    MW = "MW"
    MY = "MY"
    MV = "MV"
    ML = "ML"
    MT = "MT"
    MH = "MH"
    MQ = "MQ"
    MR = "MR"
    MU = "MU"
    YT = "YT"
    MX = "MX"
    FM = "FM"
    MD = "MD"
    MC = "MC"
    MN = "MN"
    ME = "ME"
    MS = "MS"
    MA = "MA"
    MZ = "MZ"
    MM = "MM"
    NA = "NA"
    NR = "NR"
    NP = "NP"
    NL = "NL"
    NC = "NC"
    NZ = "NZ"
    NI = "NI"
    NE = "NE"
    NG = "NG"
    NU = "NU"
    NF = "NF"
    MP = "MP"
    NO = "NO"
    OM = "OM"
    PK = "PK"
    PW = "PW"
    PS = "PS"
    PA = "PA"
    PG = "PG"
    PY = "PY"
    PE = "PE"
    PH = "PH"
    PN = "PN"
    PL = "PL"
    PT = "PT"
    PR = "PR"
    QA = "QA"
    MK = "MK"
    RO = "RO"
    RU = "RU"
    RW = "RW"
    RE = "RE"
    BL = "BL"
    SH = "SH"
    KN = "KN"
    LC = "LC"
    MF = "MF"
    PM = "PM"
    VC = "VC"
    WS = "WS"
    SM = "SM"
    ST = "ST"
    SA = "SA"
    SN = "SN"
    RS = "RS"
    SC = "SC"
    SL = "SL"
    SG = "SG"
    SX = "SX"
    SK = "SK"
    SI = "SI"
    SB = "SB"
    SO = "SO"
    ZA = "ZA"
    GS = "GS"
    SS = "SS"
    ES = "ES"
    LK = "LK"
    SD = "SD"
    SR = "SR"
    SJ = "SJ"
    SE = "SE"
    CH = "CH"
    SY = "SY"
    TW = "TW"
    TJ = "TJ"
    TZ = "TZ"
    TH = "TH"
    TL = "TL"
    TG = "TG"
    TK = "TK"
    TO = "TO"
    TT = "TT"
    TN = "TN"
    TR = "TR"
    TM = "TM"
    TC = "TC"
    TV = "TV"
    UG = "UG"
    UA = "UA"
    AE = "AE"
    GB = "GB"
    UM = "UM"
    US = "US"
    UY = "UY"
    UZ = "UZ"
    VU = "VU"
    VE = "VE"
    VN = "VN"
    VG = "VG"
    VI = "VI"
    WF = "WF"
    EH = "EH"
    YE = "YE"
    ZM = "ZM"
    ZW = "ZW"
    AX = "AX"
    ZZ = "ZZ"


class MerchantCategory(_CamelModel):
    key: Optional[str] = None
    code: str
    name: Optional[str] = None


class Country(_CamelModel):
    # Known codes become CountryCode members; other strings pass through.
    code: Union[CountryCode, str] = Field(union_mode="left_to_right")
    alpha3: Optional[str] = None
    name: Optional[str] = None


class Merchant(_CamelModel):
    category: MerchantCategory
    name: str
    city: str
    country: Country


class TransactionCard(_CamelModel):
    id: str


class Transaction(_CamelModel):
    """
    A synthetic card transaction used to simulate code execution.

    Only the fields that end up in the simulation payload are required.

    Example:
        Transaction.model_validate({
            "centsAmount": 1000,
            "currencyCode": "ZAR",
            "merchant": {
                "category": {"code": "5411"},
                "name": "Test Store",
                "city": "Cape Town",
                "country": {"code": "ZA"},
            },
        })
    """

    account_number: Optional[str] = None
    date_time: Optional[str] = None
    cents_amount: int
    currency_code: str
    type: Optional[str] = None
    reference: Optional[str] = None
    card: Optional[TransactionCard] = None
    merchant: Merchant


def _country_value(code: Union[CountryCode, str]) -> str:
    return code.value if isinstance(code, CountryCode) else code


class SimulationPayload(BaseModel):
    """Flat body sent to the code/execute endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    simulation_code: str = Field(alias="simulationcode")
    cents_amount: int = Field(alias="centsAmount")
    currency_code: str = Field(alias="currencyCode")
    merchant_code: str = Field(alias="merchantCode")
    merchant_name: str = Field(alias="merchantName")
    merchant_city: str = Field(alias="merchantCity")
    country_code: str = Field(alias="countryCode")

    @classmethod
    def from_transaction(cls, code: str, transaction: Transaction) -> "SimulationPayload":
        merchant = transaction.merchant
        return cls(
            simulation_code=code,
            cents_amount=transaction.cents_amount,
            currency_code=transaction.currency_code,
            merchant_code=merchant.category.code,
            merchant_name=merchant.name,
            merchant_city=merchant.city,
            country_code=_country_value(merchant.country.code),
        )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


# --- Response envelopes ---------------------------------------------------


class Card(TypedDict):
    CardKey: int
    CardNumber: str
    IsProgrammable: bool
    status: str
    CardTypeCode: str
    AccountNumber: str
    AccountId: str


class _Cards(TypedDict):
    cards: list[Card]


class CardResponse(TypedDict, total=False):
    data: _Cards
    links: dict[str, Any]
    meta: dict[str, Any]


class CodeResult(TypedDict):
    codeId: str
    code: str
    createdAt: str
    updatedAt: str
    error: Any


class CodeResponse(TypedDict):
    data: dict[str, CodeResult]


class EnvResult(TypedDict):
    variables: dict[str, str]
    createdAt: str
    updatedAt: str
    error: Any


class EnvResponse(TypedDict):
    data: dict[str, EnvResult]


class ExecutionItem(TypedDict):
    executionId: str
    rootCodeFunctionId: str
    sandbox: bool
    type: str
    authorizationApproved: Optional[bool]
    logs: list[Any]
    smsCount: int
    emailCount: int
    pushNotificationCount: int
    createdAt: str
    startedAt: str
    completedAt: str
    updatedAt: str


class ExecutionItems(TypedDict):
    executionItems: list[ExecutionItem]
    error: Any


class _ExecutionResultData(TypedDict):
    result: ExecutionItems


class ExecutionResult(TypedDict):
    data: _ExecutionResultData


class ExecuteResult(TypedDict):
    data: dict[str, list[ExecutionItem]]


class CodeToggle(TypedDict):
    data: dict[str, dict[str, bool]]


class ReferenceItem(TypedDict):
    Code: str
    Name: str


class ReferenceResponse(TypedDict):
    data: dict[str, list[ReferenceItem]]
