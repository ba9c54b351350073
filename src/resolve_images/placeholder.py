"""Static placeholder graphic served when no article image can be resolved."""

PLACEHOLDER_CONTENT_TYPE = "image/svg+xml"
PLACEHOLDER_CACHE_CONTROL = "public, max-age=300"

PLACEHOLDER_SVG = b"""<svg xmlns="http://www.w3.org/2000/svg" width="1200" height="630" viewBox="0 0 1200 630" role="img" aria-label="SKIDS Knowledge Library">
<defs><linearGradient id="bg" x1="0" y1="0" x2="1" y2="1"><stop offset="0" stop-color="#f4f9ff"/><stop offset="1" stop-color="#f6efe6"/></linearGradient></defs>
<rect width="1200" height="630" fill="url(#bg)"/>
<circle cx="600" cy="260" r="86" fill="#d9e3ee"/>
<path d="M560 250a40 40 0 0 1 80 0v30h-80z" fill="#8e5a36" opacity="0.55"/>
<text x="600" y="420" font-family="Segoe UI, sans-serif" font-size="44" font-weight="700" fill="#25374f" text-anchor="middle">SKIDS Knowledge Library</text>
<text x="600" y="472" font-family="Segoe UI, sans-serif" font-size="26" fill="#5d6d84" text-anchor="middle">Child development guidance for parents</text>
</svg>
"""
