import re

from src.modules.summarizer.contracts import SummarizationProvider

SYSTEM_PROMPT = (
    "你是专业的汽车材料技术翻译专家。将英文内容翻译成中文并生成简洁的摘要（100字以内）。"
    "直接输出摘要，不要添加前缀。"
)
DETAILED_SYSTEM_PROMPT = (
    "你是专业的汽车材料技术翻译专家。将英文内容翻译成中文并生成详细的摘要（200-300字）。"
    "摘要要包含：1)核心内容概述 2)技术要点 3)应用价值。直接输出摘要，不要添加前缀。"
)


class DoubaoProvider(SummarizationProvider):
    name = "doubao"
    endpoint = "https://ark.cn-beijing.volces.com/api/v3/chat/completions"
    model = "doubao-lite-4k"
    max_input_chars = 500

    def build_payload(self, text: str) -> dict:
        prompt = (
            "请将以下汽车材料技术文章翻译成中文并生成简短摘要（100字以内），"
            f"只输出摘要内容：\n\n{text}"
        )
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": 200,
            "temperature": 0.3,
        }

    def parse_response(self, data: dict) -> str:
        return data["choices"][0]["message"]["content"]


class DeepSeekProvider(SummarizationProvider):
    name = "deepseek"
    endpoint = "https://api.deepseek.com/v1/chat/completions"
    model = "deepseek-chat"
    max_input_chars = 500
    key_prefix = "sk-"

    def build_payload(self, text: str) -> dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": f"请翻译并生成摘要：\n\n{text}"},
            ],
            "temperature": 0.3,
            "max_tokens": 200,
        }

    def parse_response(self, data: dict) -> str:
        return data["choices"][0]["message"]["content"]


class QwenProvider(SummarizationProvider):
    name = "qwen"
    endpoint = "https://dashscope.aliyuncs.com/api/v1/services/aigc/text-generation/generation"
    model = "qwen-turbo"
    max_input_chars = 800
    key_prefix = "sk-"

    def build_payload(self, text: str) -> dict:
        return {
            "model": self.model,
            "input": {
                "messages": [
                    {"role": "system", "content": DETAILED_SYSTEM_PROMPT},
                    {"role": "user", "content": f"请翻译并生成摘要（200-300字）：\n\n{text}"},
                ]
            },
            "parameters": {"max_tokens": 500, "temperature": 0.3},
        }

    def parse_response(self, data: dict) -> str:
        return data["output"]["text"]


PROVIDERS: dict[str, type[SummarizationProvider]] = {
    p.name: p for p in (DoubaoProvider, DeepSeekProvider, QwenProvider)
}


def sanitize_api_key(raw: str | None) -> str | None:
    """Strip whitespace and stray control characters pasted along with a key."""
    if raw is None:
        return None
    cleaned = re.sub(r"[\r\n\t]", "", raw.strip())
    return cleaned or None


def build_provider(name: str, api_key: str | None) -> SummarizationProvider | None:
    """Instantiate the named provider, or ``None`` when it has no usable key."""
    provider_cls = PROVIDERS.get(name)
    if provider_cls is None:
        raise ValueError(f"Unknown summarization provider '{name}'")
    key = sanitize_api_key(api_key)
    if key is None:
        return None
    return provider_cls(key)
