"""
Minimal example: diagnostic check of an observed document against an
expected one.

Run this with:
    python examples/minimal.py
"""

from rawcompat import check, load_document

WANT = b"""{
    "arr_fail": [{"x": [null]}],
    "arr_ok": [1.0, ["\\/", {"x": []}]],
    "f_fail": false,
    "num_fail": 5.1,
    "num_ok": 5.3e1,
    "obj_fail": {"missing": [], "fail": ["\\/", null]},
    "str_ok": "\\/"
}"""

GOT = b"""{
    "arr_fail": [{"x": [[]]}, true],
    "arr_ok": [10e-1, ["/", {"x": ["extra"]}]],
    "f_fail": true,
    "num_fail": 5e1,
    "num_ok": 53,
    "obj_fail": {"fail": [0]},
    "str_ok": "/",
    "extra": "doesn't matter"
}"""


def main() -> None:
    records = check(load_document(GOT), load_document(WANT))
    if not records:
        print("complete validation success!")
        return

    print("validation errors:")
    for record in records:
        print(f"- {record}")


if __name__ == "__main__":
    main()
