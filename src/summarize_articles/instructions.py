SUMMARY_INSTRUCTIONS = """
Eres un experto en tecnología de {platform}. A continuación se encuentra el texto de un artículo.

**Instrucciones:**
1.  Crea un título corto, atractivo y en negritas para el artículo en una sola línea.
2.  En la siguiente línea, escribe un resumen en un solo párrafo conciso (entre 50 y 70 palabras) en {language}.
3.  El resumen debe enfocarse en el tema principal y las conclusiones clave del texto proporcionado.
4.  Añade 2 o 3 emojis relevantes al final del resumen.
5.  **IMPORTANTE**: Basa tu respuesta exclusivamente en el siguiente texto. No inventes información ni utilices conocimiento externo.

**Texto del Artículo:**
---
{article_text}
""".strip()


EMAIL_PHRASES_INSTRUCTIONS = """
Eres un experto en comunicación y tecnología para {platform}.
Quiero que generes dos frases en español para un correo electrónico sobre las últimas noticias.

Contexto del video:
Título: {video_title}
Descripción: {video_description}
Fecha de hoy: {date}

Instrucciones:
1. Genera una "frase de apertura" casual y amigable que mencione que estas son las noticias de hoy ({date}). Usa el contexto del video para hacerla relevante y diferente cada vez.
2. Genera una "frase de cierre" casual, similar a "Pronto más noticias" pero con variaciones.

Responde ÚNICAMENTE con un objeto JSON válido con las claves "opening" y "closing". No incluyas markdown ni texto adicional.
""".strip()


VIDEO_METADATA_INSTRUCTIONS = """
As an expert YouTube content strategist specializing in SEO for a tech audience, analyze the following video.
Based on the video content, generate the following information in SPANISH. Your response MUST be a valid JSON object with the following keys: "title", "description", "tags".

- "title": Create a new, compelling, SEO-friendly title (max 100 chars) that improves upon the original.
- "description": Write a detailed, engaging description. Include:
    1. A brief summary of the video content.
    2. A "Table of Contents" (TOC) with accurate timestamps (e.g., 0:00 Introduction) based on the actual video content.
    3. 5-10 relevant hashtags at the end.
- "tags": Provide an array of around 15 high-quality, detailed keywords (tags). Tags should not contain commas.
""".strip()
