LIKE_ESCAPE = "\\"


def contains_pattern(text: str) -> str:
    """
    把使用者輸入包成 LIKE 子字串 pattern，% 和 _ 當一般字元
    搭配 .ilike(pattern, escape=LIKE_ESCAPE) 使用
    """
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
