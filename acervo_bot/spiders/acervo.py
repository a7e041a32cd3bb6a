from scrapy import Request, Spider

from acervo_bot.items import COLECOES, montar_item


class AcervoSpider(Spider):
    """Baixa as cinco coleções em JSON publicadas em <base_url>/data/."""

    name = "acervo"

    def __init__(self, base_url=None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.base_url = base_url

    def start_requests(self):
        base_url = (self.base_url or self.settings.get("ACERVO_BASE_URL") or "").rstrip("/")
        if not base_url:
            self.logger.error("Nenhuma base_url informada (use -a base_url=... ou ACERVO_BASE_URL)")
            return

        for nome, (arquivo, _classe) in COLECOES.items():
            yield Request(
                f"{base_url}/data/{arquivo}",
                callback=self.parse_colecao,
                cb_kwargs={"colecao": nome},
            )

    def parse_colecao(self, response, colecao):
        registros = response.json()
        if not isinstance(registros, list):
            self.logger.warning(f"{response.url} não contém uma lista de registros")
            return

        _arquivo, classe = COLECOES[colecao]
        for registro in registros:
            if isinstance(registro, dict):
                yield montar_item(classe, registro)
