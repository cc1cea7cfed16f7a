import re
from .base import AIProvider, ProviderType
from .prompts import as_distribution
from services.difficulty import split_counts

TABLE_HEADER = (
    "| Question | Option A | Option B | Option C | Option D | Correct Answer | Explanation | Difficulty |\n"
    "|----------|----------|----------|----------|----------|----------------|-------------|------------|"
)


class LocalStub(AIProvider):
    """Offline provider: fill-in-the-blank questions cut from the document itself."""

    provider_type = ProviderType.LOCAL
    response_format = "markdown"
    display_name = "Local stub"

    def __init__(self, enabled: bool = False):
        # switched on by configuration, there is no credential to look for
        self._available = bool(enabled)

    def _sentences(self, text):
        parts = re.split(r'[\.!\?]\s+', text or '')
        return [p.strip().replace('|', '/') for p in parts if p and len(p.strip()) > 0]

    def _keyword(self, sentence):
        words = re.findall(r"[^\W\d_]{4,}", sentence)
        return max(words, key=len) if words else None

    def generate_quiz(self, content, number_of_questions, difficulty_distribution,
                      additional_instructions="", options=None) -> str:
        self._ensure_available()
        sents = [s for s in self._sentences(content) if self._keyword(s)]
        pool = []
        for s in sents:
            k = self._keyword(s)
            if k.lower() not in (p.lower() for p in pool):
                pool.append(k)

        counts = split_counts(as_distribution(difficulty_distribution), number_of_questions)
        levels = [lvl for lvl, n in counts.items() for _ in range(n)]

        rows = [TABLE_HEADER]
        for i, s in enumerate(sents[:number_of_questions]):
            answer = self._keyword(s)
            distractors = [w for w in pool if w.lower() != answer.lower()][:3]
            if len(distractors) < 3:
                break
            # rotate the answer position so it is not always option A
            opts = distractors[:]
            opts.insert(i % 4, answer)
            blank = re.sub(re.escape(answer), "_____", s, count=1)
            level = levels[i] if i < len(levels) else "medium"
            rows.append(
                f"| Fill in the blank: {blank} | {' | '.join(opts)} | {answer} "
                f"| The sentence in the document reads \"{s}\". | {level} |"
            )
        return "\n".join(rows)
