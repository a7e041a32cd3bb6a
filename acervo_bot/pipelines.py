import json
from pathlib import Path

from itemadapter import ItemAdapter

from acervo_bot.items import COLECOES, colecao_do_item, montar_item


class AcervoBotPipeline:
    def process_item(self, item, spider):
        # Garante None nos campos opcionais e [] nas listas de filhos
        return montar_item(type(item), ItemAdapter(item).asdict())


class AcervoJsonPipeline:
    """Agrupa os itens por coleção e grava um JSON por coleção ao fechar o spider.

    Os arquivos usam os mesmos nomes servidos pelo site (works.json,
    itsuwahen.json, ...), na pasta ACERVO_PASTA, preservando a ordem de chegada.
    """

    def __init__(self, pasta):
        self.pasta = Path(pasta)
        self.colecoes = {nome: [] for nome in COLECOES}

    @classmethod
    def from_crawler(cls, crawler):
        return cls(crawler.settings.get("ACERVO_PASTA", "data"))

    def process_item(self, item, spider):
        colecao = colecao_do_item(item)
        if colecao is None:
            spider.logger.warning(f"Item sem coleção conhecida ignorado: {type(item).__name__}")
            return item

        self.colecoes[colecao].append(ItemAdapter(item).asdict())
        return item

    def close_spider(self, spider):
        self.pasta.mkdir(parents=True, exist_ok=True)
        for colecao, registros in self.colecoes.items():
            if not registros:
                spider.logger.warning(f"Nenhum registro de {colecao} baixado")
                continue

            arquivo, _classe = COLECOES[colecao]
            with open(self.pasta / arquivo, "w", encoding="utf-8") as f:
                json.dump(registros, f, indent=2, ensure_ascii=False)
            spider.logger.info(f"{len(registros)} registros de {colecao} gravados em {arquivo}")
