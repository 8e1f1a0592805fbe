"""Built-in product list used when nothing has been persisted yet."""

from __future__ import annotations

from ..core.types import Product, Snapshot

DEFAULT_PRODUCTS: Snapshot = (
    Product("gas", "Botijão de Gás 13kg", 2, "R$ 110,00", "assets/produtos/gas.jpg"),
    Product("agua", "Galão de Água 20L", 8, "R$ 14,00", "assets/produtos/agua.jpg"),
    Product("carvao", "Carvão 5kg", 6, "R$ 25,00", "assets/produtos/carvao.jpg"),
    Product("gelo", "Saco de Gelo 5kg", 10, "R$ 12,00", "assets/produtos/gelo.jpg"),
    Product("refri", "Refrigerante 2L", 12, "R$ 9,50", "assets/produtos/refri.jpg"),
    Product("cerveja", "Cerveja Lata 350ml", 24, "R$ 4,50", "assets/produtos/cerveja.jpg"),
    Product("arroz", "Arroz 5kg", 5, "R$ 27,90", "assets/produtos/arroz.jpg"),
    Product("feijao", "Feijão Carioca 1kg", 7, "R$ 8,99", "assets/produtos/feijao.jpg"),
    Product("oleo", "Óleo de Soja 900ml", 9, "R$ 7,49", "assets/produtos/oleo.jpg"),
    Product("acucar", "Açúcar Refinado 1kg", 0, "R$ 4,99", "assets/produtos/acucar.jpg"),
    Product("cafe", "Café Torrado 500g", 4, "R$ 18,90", "assets/produtos/cafe.jpg"),
)
