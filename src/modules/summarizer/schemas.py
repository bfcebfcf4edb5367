from src.modules.ranker.schemas import RankedArticle


class SummarizedArticle(RankedArticle):
    summary: str
