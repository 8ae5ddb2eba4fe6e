PROVIDERS = {
    "groq": {
        "display_name": "Groq",
        "api_key_env": "GROQ_API_KEY",
        "tier": "free",
        "timeout": 10.0,
    },
    "together": {
        "display_name": "Together AI",
        "api_key_env": "TOGETHER_API_KEY",
        "tier": "free",
        "timeout": 20.0,
    },
    "huggingface": {
        "display_name": "Hugging Face",
        "api_key_env": "HUGGINGFACE_API_KEY",
        "tier": "free",
        "timeout": 20.0,
    },
    "cohere": {
        "display_name": "Cohere",
        "api_key_env": "COHERE_API_KEY",
        "tier": "free",
        "timeout": 10.0,
    },
    "openrouter": {
        "display_name": "OpenRouter",
        "api_key_env": "OPENROUTER_API_KEY",
        "tier": "paid",
        "timeout": 10.0,
    },
}

