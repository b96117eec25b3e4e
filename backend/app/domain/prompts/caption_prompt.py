from app.domain.entities.caption_entity import CaptionPrompt


SYSTEM_INSTRUCTION = (
    "Anda adalah asisten copywriting kreatif untuk UMKM. "
    "Beri caption singkat, menarik, ramah, dan mudah dibaca."
)

USER_TEMPLATE = (
    "Buatkan caption Instagram untuk UMKM berdasarkan permintaan berikut:\n"
    "{prompt}\n"
    "Tambahkan emoji dan hashtag secukupnya."
)

TEMPERATURE = 0.7
MAX_OUTPUT_TOKENS = 180


def build_caption_prompt(prompt: str) -> CaptionPrompt:
    # str.format leaves braces inside the user's text alone
    return CaptionPrompt(
        system=SYSTEM_INSTRUCTION,
        user=USER_TEMPLATE.format(prompt=prompt),
        temperature=TEMPERATURE,
        max_output_tokens=MAX_OUTPUT_TOKENS,
    )
