import json
import logging
import os

from typing import NamedTuple

from acervo_bot.items import COLECOES, montar_item

logger = logging.getLogger(__name__)

ACERVO_PASTA = os.environ.get("ACERVO_PASTA", "data")


class Acervo(NamedTuple):
    termos: tuple = ()
    episodios: tuple = ()
    hinos: tuple = ()
    ofudessaki: tuple = ()
    ossashizu: tuple = ()

    def tamanhos(self) -> dict:
        return {nome: len(registros) for nome, registros in self._asdict().items()}


def carregar_colecao(caminho: str, classe) -> tuple:
    if not os.path.exists(caminho):
        logger.error(f"❌ Arquivo {caminho} não encontrado")
        return ()

    try:
        with open(caminho, "r", encoding="utf-8") as f:
            dados = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"❌ Erro ao carregar {caminho}: {e}")
        return ()

    if not isinstance(dados, list):
        logger.error(f"❌ {caminho} não contém uma lista de registros")
        return ()

    itens = []
    for posicao, registro in enumerate(dados):
        if not isinstance(registro, dict):
            logger.warning(f"⚠️ Registro {posicao} de {caminho} ignorado: não é um objeto")
            continue
        itens.append(montar_item(classe, registro))
    return tuple(itens)


def carregar_acervo(pasta: str = ACERVO_PASTA) -> Acervo:
    """Lê as cinco coleções (works.json, itsuwahen.json, ...) da pasta de dados."""
    colecoes = {
        nome: carregar_colecao(os.path.join(pasta, arquivo), classe)
        for nome, (arquivo, classe) in COLECOES.items()
    }
    acervo = Acervo(**colecoes)
    logger.info(f"📚 Acervo carregado de {pasta}: {acervo.tamanhos()}")
    return acervo
