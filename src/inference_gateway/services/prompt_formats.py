from typing import Optional


def format_prompt(prompt_format: Optional[str], prompt: str, system_prompt: Optional[str] = None) -> str:
    """Wrap a prompt in the chat template a model family was trained on."""
    if prompt_format == "mistral":
        if system_prompt:
            return f"[INST] {system_prompt}\n\n{prompt} [/INST]"
        return f"[INST] {prompt} [/INST]"

    if prompt_format == "qwen":
        system = f"<|im_start|>system\n{system_prompt}<|im_end|>\n" if system_prompt else ""
        return f"{system}<|im_start|>user\n{prompt}<|im_end|>\n<|im_start|>assistant\n"

    if prompt_format == "phi":
        system = f"<|system|>\n{system_prompt}<|end|>\n" if system_prompt else ""
        return f"{system}<|user|>\n{prompt}<|end|>\n<|assistant|>\n"

    if prompt_format == "gemma":
        # Gemma has no system role; the instruction is folded into the user turn
        content = f"{system_prompt}\n\n{prompt}" if system_prompt else prompt
        return f"<start_of_turn>user\n{content}<end_of_turn>\n<start_of_turn>model\n"

    if prompt_format == "llama":
        system = (
            f"<|start_header_id|>system<|end_header_id|>\n{system_prompt}<|eot_id|>"
            if system_prompt
            else ""
        )
        return (
            f"<|begin_of_text|>{system}"
            f"<|start_header_id|>user<|end_header_id|>\n{prompt}<|eot_id|>"
            f"<|start_header_id|>assistant<|end_header_id|>\n"
        )

    if prompt_format == "starcoder":
        system = f"### System:\n{system_prompt}\n\n" if system_prompt else ""
        return f"{system}### User:\n{prompt}\n\n### Assistant:\n"

    return prompt
