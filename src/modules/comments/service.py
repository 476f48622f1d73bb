from bs4 import BeautifulSoup

MAX_COMMENT_LENGTH = 1000
MAX_COMMENTS_PER_HOUR = 10
MAX_COMMENTS_LISTED = 200


def sanitize_comment(text: str) -> str:
    """Reduce a comment to plain text: markup is discarded, whitespace collapsed."""
    soup = BeautifulSoup(text, "lxml")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return " ".join(soup.get_text(" ").split())
