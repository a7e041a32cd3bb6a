import scrapy


class Termo(scrapy.Item):
    romaji = scrapy.Field()
    kanji = scrapy.Field()
    significado = scrapy.Field()


class Episodio(scrapy.Item):
    episodio_numero = scrapy.Field()
    titulo_p = scrapy.Field()
    titulo_j = scrapy.Field()
    pagina = scrapy.Field()
    conteudo_p = scrapy.Field()
    conteudo_j = scrapy.Field()


class Verso(scrapy.Item):
    verso_numero = scrapy.Field()
    romaji = scrapy.Field()
    kanji = scrapy.Field()
    traducao = scrapy.Field()


class Hino(scrapy.Item):
    hino_romaji = scrapy.Field()
    hino_kanji = scrapy.Field()
    versos = scrapy.Field(filhos=Verso)


class Ofudessaki(scrapy.Item):
    parte = scrapy.Field()
    versiculo = scrapy.Field()
    conteudo_j = scrapy.Field()
    conteudo_r = scrapy.Field()
    conteudo_p = scrapy.Field()


class Paragrafo(scrapy.Item):
    conteudo_jap = scrapy.Field()
    conteudo_port = scrapy.Field()


class Ossashizu(scrapy.Item):
    data_wareki = scrapy.Field()
    data = scrapy.Field()
    data_lunar = scrapy.Field()
    ano_RD = scrapy.Field()
    paragrafos = scrapy.Field(filhos=Paragrafo)


# nome da coleção -> (arquivo servido em /data/, classe do item)
COLECOES = {
    "termos": ("works.json", Termo),
    "episodios": ("itsuwahen.json", Episodio),
    "hinos": ("mikagurauta.json", Hino),
    "ofudessaki": ("ofudessaki.json", Ofudessaki),
    "ossashizu": ("ossashizu.json", Ossashizu),
}


def colecao_do_item(item):
    for nome, (_arquivo, classe) in COLECOES.items():
        if isinstance(item, classe):
            return nome
    return None


def montar_item(classe, dados):
    """Cria um item a partir de um registro JSON solto.

    Campos ausentes viram None, listas de filhos ausentes viram [] e chaves
    desconhecidas são descartadas.
    """
    item = classe()
    for campo, meta in classe.fields.items():
        valor = dados.get(campo) if hasattr(dados, "get") else None
        filho = meta.get("filhos")
        if filho is not None:
            valor = [
                montar_item(filho, registro)
                for registro in (valor if isinstance(valor, list) else [])
                if hasattr(registro, "get")
            ]
        item[campo] = valor
    return item
