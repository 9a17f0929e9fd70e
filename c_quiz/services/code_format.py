"""
services/code_format.py

문제 리소스의 C 코드 스니펫은 한 줄로 저장되어 있으므로
화면 표시용으로 중괄호/세미콜론 기준 줄바꿈과 들여쓰기를 넣는다.
for (...; ...; ...) 안의 세미콜론은 줄바꿈하지 않는다.
"""

import re

_INDENT = "  "


def format_code(code: str) -> str:
    if not code:
        return ""

    out = []
    indent = 0
    paren_depth = 0

    for ch in code:
        if ch == "(":
            paren_depth += 1
            out.append(ch)
        elif ch == ")":
            if paren_depth > 0:
                paren_depth -= 1
            out.append(ch)
        elif ch == "{":
            indent += 1
            out.append(" {\n" + _INDENT * indent)
        elif ch == "}":
            indent = max(0, indent - 1)
            out.append("\n" + _INDENT * indent + "}\n" + _INDENT * indent)
        elif ch == ";":
            out.append(";")
            out.append("\n" + _INDENT * indent if paren_depth == 0 else " ")
        else:
            out.append(ch)

    formatted = "".join(out)
    # 빈 줄 제거 + 줄 끝 공백 정리
    formatted = re.sub(r"\n\s*\n", "\n", formatted)
    lines = [line.rstrip() for line in formatted.strip().split("\n")]
    return "\n".join(line for line in lines if line.strip())
