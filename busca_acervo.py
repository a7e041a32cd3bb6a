import logging

from typing import NamedTuple, Optional

from itemadapter import ItemAdapter

from pesquisa_textual import contem, normalizar

logger = logging.getLogger(__name__)

ERRO_SEM_ESCOPO = "Selecione pelo menos um tipo de busca"

SEM_CONSULTA = "sem_consulta"
SEM_ESCOPO = "sem_escopo"
SEM_RESULTADOS = "sem_resultados"
COM_RESULTADOS = "com_resultados"

CAMPOS_TERMO = ("romaji", "kanji", "significado")
CAMPOS_EPISODIO = ("episodio_numero", "titulo_p", "titulo_j", "conteudo_p", "conteudo_j")
CAMPOS_OFUDESSAKI = ("parte", "versiculo", "conteudo_j", "conteudo_r", "conteudo_p")
CAMPOS_HINO = ("hino_romaji", "hino_kanji")
CAMPOS_VERSO = ("romaji", "kanji", "traducao")
CAMPOS_OSSASHIZU = ("data_wareki", "data", "data_lunar", "ano_RD")
CAMPOS_PARAGRAFO = ("conteudo_port", "conteudo_jap")


class OpcoesBusca(NamedTuple):
    termos: bool = False
    episodios: bool = False
    hinos: bool = False
    ofudessaki: bool = False
    ossashizu: bool = False

    @classmethod
    def de_mapping(cls, opcoes):
        return cls(**{campo: bool(opcoes.get(campo, False)) for campo in cls._fields})

    @classmethod
    def todas(cls):
        return cls(*(True for _ in cls._fields))

    def alguma(self) -> bool:
        return any(self)


class ResultadoBusca(NamedTuple):
    termos: list
    episodios: list
    hinos: list
    ofudessaki: list
    ossashizu: list
    error: Optional[str] = None
    situacao: str = SEM_CONSULTA

    @property
    def total(self) -> int:
        return sum(len(getattr(self, colecao)) for colecao in OpcoesBusca._fields)


def _resultado_vazio(error=None, situacao=SEM_CONSULTA):
    return ResultadoBusca([], [], [], [], [], error=error, situacao=situacao)


def _valor_comparavel(valor):
    # identificadores numéricos (ex.: episodio_numero = 12) comparam pela forma textual
    if isinstance(valor, (int, float)) and not isinstance(valor, bool):
        return str(valor)
    return valor


def registro_casa(registro, campos, consulta_norm: str) -> bool:
    adapter = ItemAdapter(registro)
    return any(
        contem(_valor_comparavel(adapter.get(campo)), consulta_norm)
        for campo in campos
    )


def _filtrar(registros, campos, consulta):
    consulta_norm = normalizar(consulta)
    return [r for r in registros if registro_casa(r, campos, consulta_norm)]


def filtrar_termos(termos, consulta):
    return _filtrar(termos, CAMPOS_TERMO, consulta)


def filtrar_episodios(episodios, consulta):
    return _filtrar(episodios, CAMPOS_EPISODIO, consulta)


def filtrar_ofudessaki(ofudessaki, consulta):
    return _filtrar(ofudessaki, CAMPOS_OFUDESSAKI, consulta)


def _reduzir(registros, campos_pai, campo_filhos, campos_filho, consulta):
    """
    Cabeçalho do pai casou: o pai entra inteiro, com todos os filhos.
    Senão entra uma cópia do pai só com os filhos que casaram, ou nada.
    """
    consulta_norm = normalizar(consulta)
    reduzidos = []
    for registro in registros:
        if registro_casa(registro, campos_pai, consulta_norm):
            reduzidos.append(registro)
            continue

        filhos = ItemAdapter(registro).get(campo_filhos) or []
        filhos_filtrados = [
            f for f in filhos if registro_casa(f, campos_filho, consulta_norm)
        ]
        if filhos_filtrados:
            copia = registro.copy()
            copia[campo_filhos] = filhos_filtrados
            reduzidos.append(copia)
    return reduzidos


def reduzir_hinos(hinos, consulta):
    return _reduzir(hinos, CAMPOS_HINO, "versos", CAMPOS_VERSO, consulta)


def reduzir_ossashizu(ossashizu, consulta):
    return _reduzir(ossashizu, CAMPOS_OSSASHIZU, "paragrafos", CAMPOS_PARAGRAFO, consulta)


FILTROS = {
    "termos": filtrar_termos,
    "episodios": filtrar_episodios,
    "hinos": reduzir_hinos,
    "ofudessaki": filtrar_ofudessaki,
    "ossashizu": reduzir_ossashizu,
}


def _colecao(acervo, nome):
    if hasattr(acervo, "_fields"):
        return getattr(acervo, nome, None) or ()
    return acervo.get(nome) or ()


def buscar(acervo, consulta, opcoes) -> ResultadoBusca:
    """
    Executa a consulta nas coleções habilitadas em `opcoes`.

    `acervo` é um `acervo.Acervo` ou qualquer mapping com as cinco coleções;
    `opcoes` é um OpcoesBusca ou um mapping com as cinco flags. Nunca levanta
    exceção: a falta de escopo volta como `error` no resultado.
    """
    if not isinstance(opcoes, OpcoesBusca):
        opcoes = OpcoesBusca.de_mapping(opcoes or {})

    if not isinstance(consulta, str) or not consulta.strip():
        return _resultado_vazio()

    if not opcoes.alguma():
        return _resultado_vazio(error=ERRO_SEM_ESCOPO, situacao=SEM_ESCOPO)

    colecoes = {
        nome: filtro(_colecao(acervo, nome), consulta) if getattr(opcoes, nome) else []
        for nome, filtro in FILTROS.items()
    }
    total = sum(len(registros) for registros in colecoes.values())
    logger.debug(
        "Consulta %r: %s",
        consulta,
        ", ".join(f"{nome}={len(registros)}" for nome, registros in colecoes.items()),
    )

    return ResultadoBusca(
        error=None,
        situacao=COM_RESULTADOS if total else SEM_RESULTADOS,
        **colecoes,
    )
