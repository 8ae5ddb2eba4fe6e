from answer_router.core.providers import PROVIDERS
from answer_router.llms.openai_compat import OpenAICompatibleLLM


class GroqClient(OpenAICompatibleLLM):
    key = "groq"
    name = PROVIDERS["groq"]["display_name"]
    base_url = "https://api.groq.com/openai/v1/chat/completions"
    text_model = "llama-3.3-70b-versatile"
    timeout = PROVIDERS["groq"]["timeout"]
