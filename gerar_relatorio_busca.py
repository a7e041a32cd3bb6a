import glob
import html
import logging
import os
import yaml

from itemadapter import ItemAdapter

from acervo import ACERVO_PASTA, carregar_acervo
from busca_acervo import OpcoesBusca, SEM_RESULTADOS, buscar
from pesquisa_textual import destacar_texto, segmentos_para_html

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    force=True
)
logger = logging.getLogger(__name__)

PASTA_CONSULTAS = os.environ.get("PASTA_CONSULTAS", "consultas")
PASTA_RELATORIOS = os.environ.get("PASTA_RELATORIOS", "relatorios")


def _d(valor, consulta):
    if valor is not None and not isinstance(valor, str):
        valor = str(valor)
    return segmentos_para_html(destacar_texto(valor, consulta))


def _filhos(registro, campo):
    return ItemAdapter(registro).get(campo) or []


def html_termos(termos, consulta):
    itens = ""
    for t in map(ItemAdapter, termos):
        itens += (
            f"<li><strong>{_d(t.get('romaji'), consulta)}</strong> ({_d(t.get('kanji'), consulta)}):<br>"
            f"{_d(t.get('significado'), consulta)}</li>"
        )
    return f"<h3>📖 Termos ({len(termos)})</h3><ul>{itens}</ul>"


def html_episodios(episodios, consulta):
    itens = ""
    for e in map(ItemAdapter, episodios):
        itens += (
            f"<li><strong>{_d(e.get('episodio_numero'), consulta)}. {_d(e.get('titulo_p'), consulta)}</strong>"
            f" ({_d(e.get('titulo_j'), consulta)}) - p. {html.escape(str(e.get('pagina') or ''))}"
        )
        for campo in ("conteudo_p", "conteudo_j"):
            if e.get(campo):
                itens += f"<p>{_d(e.get(campo), consulta)}</p>"
        itens += "</li>"
    return f"<h3>📜 Episódios ({len(episodios)})</h3><ul>{itens}</ul>"


def html_hinos(hinos, consulta):
    itens = ""
    for hino in hinos:
        versos = ""
        for v in map(ItemAdapter, _filhos(hino, "versos")):
            versos += (
                f"<li>{html.escape(str(v.get('verso_numero') or ''))}: {_d(v.get('romaji'), consulta)}<br>"
                f"{_d(v.get('kanji'), consulta)}<br>{_d(v.get('traducao'), consulta)}</li>"
            )
        h = ItemAdapter(hino)
        itens += (
            f"<li><strong>{_d(h.get('hino_romaji'), consulta)}</strong> ({_d(h.get('hino_kanji'), consulta)})"
            f"<ol>{versos}</ol></li>"
        )
    return f"<h3>🎶 Mikagura-uta ({len(hinos)})</h3><ul>{itens}</ul>"


def html_ofudessaki(ofudessaki, consulta):
    itens = ""
    for o in map(ItemAdapter, ofudessaki):
        itens += (
            f"<li><strong>{_d(o.get('parte'), consulta)}:{_d(o.get('versiculo'), consulta)}</strong><br>"
            f"{_d(o.get('conteudo_j'), consulta)}<br>{_d(o.get('conteudo_r'), consulta)}<br>"
            f"{_d(o.get('conteudo_p'), consulta)}</li>"
        )
    return f"<h3>🖋️ Ofudessaki ({len(ofudessaki)})</h3><ul>{itens}</ul>"


def html_ossashizu(ossashizu, consulta):
    itens = ""
    for registro in ossashizu:
        paragrafos = ""
        for p in map(ItemAdapter, _filhos(registro, "paragrafos")):
            paragrafos += f"<p>{_d(p.get('conteudo_jap'), consulta)}<br>{_d(p.get('conteudo_port'), consulta)}</p>"
        o = ItemAdapter(registro)
        itens += (
            f"<li><strong>{_d(o.get('data_wareki'), consulta)} - {_d(o.get('data'), consulta)}</strong>"
            f" ({_d(o.get('data_lunar'), consulta)}, {_d(o.get('ano_RD'), consulta)}){paragrafos}</li>"
        )
    return f"<h3>🗣️ Ossashizu ({len(ossashizu)})</h3><ul>{itens}</ul>"


SECOES = {
    "termos": html_termos,
    "episodios": html_episodios,
    "hinos": html_hinos,
    "ofudessaki": html_ofudessaki,
    "ossashizu": html_ossashizu,
}


def gerar_html_resultado(consulta, resultado):
    titulo = f"<h2>🔍 Termo: <em>{html.escape(consulta)}</em> (total: {resultado.total})</h2>"
    if resultado.error:
        return titulo + f"<p><strong>⚠️ {html.escape(resultado.error)}</strong></p><hr>"
    if resultado.situacao == SEM_RESULTADOS:
        return titulo + "<p>Nenhum resultado encontrado.</p><hr>"

    secoes = "".join(
        gerar_secao(getattr(resultado, nome), consulta)
        for nome, gerar_secao in SECOES.items()
        if getattr(resultado, nome)
    )
    return titulo + secoes + "<hr>"


def carregar_opcoes(yaml_config):
    escopos = yaml_config.get("escopos")
    if not escopos:
        return OpcoesBusca.todas()

    desconhecidos = [e for e in escopos if e not in OpcoesBusca._fields]
    if desconhecidos:
        logger.warning(f"⚠️ Escopos desconhecidos ignorados: {', '.join(map(str, desconhecidos))}")
    return OpcoesBusca.de_mapping({e: True for e in escopos if e in OpcoesBusca._fields})


def gerar_relatorio(titulo, termos, opcoes, acervo):
    html_relatorio = f"<html><body><h1>📬 {html.escape(titulo)}</h1><hr>"
    for termo in termos:
        resultado = buscar(acervo, str(termo), opcoes)
        html_relatorio += gerar_html_resultado(str(termo), resultado)
    html_relatorio += "</body></html>"

    return html_relatorio


def gerar_relatorios_consultas(pasta_consultas=PASTA_CONSULTAS, pasta_relatorios=PASTA_RELATORIOS, acervo=None):
    if acervo is None:
        acervo = carregar_acervo(ACERVO_PASTA)

    gerados = []
    for consulta in sorted(glob.glob(os.path.join(pasta_consultas, "*.yaml"))):
        logger.info(f"📁 Processando arquivo: {consulta}")
        try:
            with open(consulta, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"❌ Erro ao ler {consulta}: {e}")
            continue

        titulo = config.get("titulo", "")
        termos = config.get("termos_pesquisa", [])
        if isinstance(termos, str):
            termos = [termos]

        if not titulo or not termos:
            logger.warning(f"⚠️ Ignorado: arquivo {consulta} sem campos obrigatórios (titulo ou termos_pesquisa).")
            continue

        html_relatorio = gerar_relatorio(titulo, termos, carregar_opcoes(config), acervo)

        os.makedirs(pasta_relatorios, exist_ok=True)
        nome = os.path.splitext(os.path.basename(consulta))[0]
        caminho = os.path.join(pasta_relatorios, f"{nome}.html")
        with open(caminho, "w", encoding="utf-8") as f:
            f.write(html_relatorio)
        logger.info(f"✅ Relatório gravado em {caminho}")
        gerados.append(caminho)

    return gerados


# === Execução Principal ===
if __name__ == "__main__":
    gerar_relatorios_consultas()
