import html
import unicodedata

from bisect import bisect_left, bisect_right
from typing import NamedTuple

SIMPLES = "plain"
DESTACADO = "matched"


class Segmento(NamedTuple):
    tipo: str
    texto: str


def _remover_acentos(txt: str) -> str:
    return "".join(
        c for c in unicodedata.normalize("NFD", txt)
        if unicodedata.category(c) != "Mn"
    )


def normalizar(texto) -> str:
    """Forma usada só para comparação: sem acentos e em caixa baixa.

    Qualquer valor que não seja str vira "" (campos ausentes nunca casam).
    """
    if not isinstance(texto, str):
        return ""
    return _remover_acentos(texto).lower()


def contem(texto, consulta_norm: str) -> bool:
    return consulta_norm in normalizar(texto)


def _comprimentos_acumulados(texto: str) -> list:
    # acumulados[i] = tamanho normalizado de texto[:i]
    acumulados = [0]
    for c in texto:
        acumulados.append(acumulados[-1] + len(normalizar(c)))
    return acumulados


def _achar_ocorrencias(texto_norm: str, consulta_norm: str):
    """Ocorrências não sobrepostas, da esquerda para a direita, como (início, fim)."""
    inicio = texto_norm.find(consulta_norm)
    while inicio != -1:
        fim = inicio + len(consulta_norm)
        yield inicio, fim
        inicio = texto_norm.find(consulta_norm, fim)


def _projetar_no_original(acumulados, inicio_norm, fim_norm):
    inicio = bisect_right(acumulados, inicio_norm) - 1
    fim = bisect_left(acumulados, fim_norm)
    # marcas combinantes soltas após o trecho pertencem à última letra dele
    while fim < len(acumulados) - 1 and acumulados[fim + 1] == acumulados[fim]:
        fim += 1
    return inicio, fim


def destacar_texto(texto, consulta: str):
    """
    Divide o texto em segmentos "plain" e "matched" marcando todas as
    ocorrências da consulta, sem diferenciar acentos nem caixa.

    A busca acontece no texto normalizado e cada ocorrência é projetada de volta
    no texto original, que é devolvido intacto: a concatenação dos segmentos é
    sempre igual a `texto`.
    """
    if texto is None:
        return None
    if not isinstance(texto, str):
        return [Segmento(SIMPLES, texto)]

    consulta_norm = normalizar(consulta)
    if not consulta_norm:
        return [Segmento(SIMPLES, texto)]

    acumulados = _comprimentos_acumulados(texto)
    # mesma forma usada pelos filtros (ex.: sigma final de "ΟΔΟΣ" vira "ς")
    texto_norm = normalizar(texto)
    if len(texto_norm) != acumulados[-1]:
        texto_norm = "".join(normalizar(c) for c in texto)

    trechos = []
    for inicio_norm, fim_norm in _achar_ocorrencias(texto_norm, consulta_norm):
        inicio, fim = _projetar_no_original(acumulados, inicio_norm, fim_norm)
        if trechos and inicio <= trechos[-1][1]:
            trechos[-1][1] = max(trechos[-1][1], fim)
        else:
            trechos.append([inicio, fim])

    if not trechos:
        return [Segmento(SIMPLES, texto)]

    segmentos = []
    cursor = 0
    for inicio, fim in trechos:
        if cursor < inicio:
            segmentos.append(Segmento(SIMPLES, texto[cursor:inicio]))
        segmentos.append(Segmento(DESTACADO, texto[inicio:fim]))
        cursor = fim
    if cursor < len(texto):
        segmentos.append(Segmento(SIMPLES, texto[cursor:]))

    return segmentos


def segmentos_para_html(segmentos) -> str:
    if segmentos is None:
        return ""
    partes = []
    for tipo, texto in segmentos:
        texto = html.escape(str(texto))
        if tipo == DESTACADO:
            partes.append(f'<mark style="background:yellow;color:black;">{texto}</mark>')
        else:
            partes.append(texto)
    return "".join(partes)
