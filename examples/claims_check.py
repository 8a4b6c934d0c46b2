"""
Example: checking decoded token claims against required claims.

Arrays are matched by containment, so a required group only has to appear
somewhere in the token's group list.

Run this with:
    python examples/claims_check.py
"""

from rawcompat import check_claims

REQUIRED = {"iss": "https://auth.example.com", "groups": ["deploy"]}


def main() -> None:
    tokens = {
        "ci-bot": {
            "iss": "https://auth.example.com",
            "sub": "ci-bot",
            "groups": ["build", "deploy", "read"],
        },
        "intern": {
            "iss": "https://auth.example.com",
            "sub": "intern",
            "groups": ["read"],
        },
    }

    for name, claims in tokens.items():
        error = check_claims(claims, REQUIRED)
        if error is None:
            print(f"{name}: allowed")
        else:
            print(f"{name}: denied ({error})")


if __name__ == "__main__":
    main()
