from answer_router.core.providers import PROVIDERS
from answer_router.llms.openai_compat import OpenAICompatibleLLM


class TogetherClient(OpenAICompatibleLLM):
    """Together AI; switches to the vision model when the request carries an image."""

    key = "together"
    name = PROVIDERS["together"]["display_name"]
    base_url = "https://api.together.xyz/v1/chat/completions"
    text_model = "meta-llama/Meta-Llama-3.1-8B-Instruct-Turbo"
    vision_model = "meta-llama/Llama-3.2-11B-Vision-Instruct-Turbo"
    # vision models need more time
    timeout = PROVIDERS["together"]["timeout"]
