"""Email normalization.

Learn: The normalized address is the account's lookup key, so two
spellings of the same mailbox must collapse to one string:
- Everything is lowercased
- Gmail ignores dots and "+tag" in the local part (googlemail.com is gmail.com)
- iCloud and the Outlook/Hotmail/Live family ignore "+tag"
- Yahoo uses "-tag" for disposable addresses
- Yandex serves one mailbox under several domains

normalize_email() checks the address syntax with email-validator first, then
applies the provider rules. It is deterministic and idempotent: feeding its
output back in returns the same string.
"""

from email_validator import EmailNotValidError, validate_email

GMAIL_DOMAINS = frozenset({"gmail.com", "googlemail.com"})

ICLOUD_DOMAINS = frozenset({"icloud.com", "me.com"})

OUTLOOK_DOMAINS = frozenset(
    {
        "hotmail.at", "hotmail.be", "hotmail.ca", "hotmail.cl", "hotmail.co.il",
        "hotmail.co.nz", "hotmail.co.th", "hotmail.co.uk", "hotmail.com",
        "hotmail.com.ar", "hotmail.com.au", "hotmail.com.br", "hotmail.com.gr",
        "hotmail.com.mx", "hotmail.com.pe", "hotmail.com.tr", "hotmail.com.vn",
        "hotmail.cz", "hotmail.de", "hotmail.dk", "hotmail.es", "hotmail.fr",
        "hotmail.hu", "hotmail.id", "hotmail.ie", "hotmail.in", "hotmail.it",
        "hotmail.jp", "hotmail.kr", "hotmail.lv", "hotmail.my", "hotmail.ph",
        "hotmail.pt", "hotmail.sa", "hotmail.sg", "hotmail.sk",
        "live.be", "live.co.uk", "live.com", "live.com.ar", "live.com.mx",
        "live.de", "live.es", "live.eu", "live.fr", "live.it", "live.nl",
        "msn.com",
        "outlook.at", "outlook.be", "outlook.cl", "outlook.co.il", "outlook.co.nz",
        "outlook.co.th", "outlook.com", "outlook.com.ar", "outlook.com.au",
        "outlook.com.br", "outlook.com.gr", "outlook.com.pe", "outlook.com.tr",
        "outlook.com.vn", "outlook.cz", "outlook.de", "outlook.dk", "outlook.es",
        "outlook.fr", "outlook.hu", "outlook.id", "outlook.ie", "outlook.in",
        "outlook.it", "outlook.jp", "outlook.kr", "outlook.lv", "outlook.my",
        "outlook.ph", "outlook.pt", "outlook.sa", "outlook.sg", "outlook.sk",
        "passport.com",
    }
)

YAHOO_DOMAINS = frozenset(
    {
        "rocketmail.com", "yahoo.ca", "yahoo.co.uk", "yahoo.com", "yahoo.de",
        "yahoo.fr", "yahoo.in", "yahoo.it", "ymail.com",
    }
)

YANDEX_DOMAINS = frozenset(
    {"yandex.ru", "yandex.ua", "yandex.kz", "yandex.com", "yandex.by", "ya.ru"}
)


def normalize_email(email: str) -> str:
    """Return the canonical form of `email`.

    Raises ValueError if the address has no usable local part or domain.
    """
    try:
        validated = validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(str(e)) from e

    local = validated.local_part.lower()
    domain = validated.domain.lower()

    # Cutting a tag can leave a trailing dot, which is not a valid address.
    if domain in GMAIL_DOMAINS:
        local = local.split("+", 1)[0].replace(".", "")
        domain = "gmail.com"
    elif domain in ICLOUD_DOMAINS or domain in OUTLOOK_DOMAINS:
        local = local.split("+", 1)[0].rstrip(".")
    elif domain in YAHOO_DOMAINS:
        local = local.split("-", 1)[0].rstrip(".")
    elif domain in YANDEX_DOMAINS:
        domain = "yandex.ru"

    if not local:
        raise ValueError("Email address has no usable local part")
    return f"{local}@{domain}"
