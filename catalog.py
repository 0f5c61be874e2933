from urllib.parse import quote

from booking_schemas import Product

PRODUCT_IMAGES = {
    "JetSky": "img/jetsky.jpg",
    "Cuatriciclo": "img/cuatri.avif",
    "Equipo de Buceo": "img/buceo.jpg",
    "Tabla de Surf (adultos)": "img/tabla-surf-adulto.jpg",
    "Tabla de Surf (niños)": "img/tabla-surf-niño.jpg",
}
DEFAULT_IMAGE = "img/no-image.png"
PLACEHOLDER_URL = "https://via.placeholder.com/300x200?text={text}"


def product_image_url(product: Product) -> str:
    return PRODUCT_IMAGES.get(product.name, DEFAULT_IMAGE)


def placeholder_image_url(product: Product) -> str:
    """Used when the local images are not available."""
    return PLACEHOLDER_URL.format(text=quote(product.name))
