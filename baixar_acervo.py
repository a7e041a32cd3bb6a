import logging
import os
import shutil
import subprocess

from acervo import ACERVO_PASTA, carregar_acervo

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    force=True
)
logger = logging.getLogger(__name__)

ACERVO_BASE_URL = os.environ.get("ACERVO_BASE_URL", "")


def limpar_pasta_acervo():
    if os.path.exists(ACERVO_PASTA):
        shutil.rmtree(ACERVO_PASTA)
    os.makedirs(ACERVO_PASTA)


def montar_comando_crawl(base_url: str, pasta: str) -> list:
    return [
        "scrapy", "crawl", "acervo",
        "-a", f"base_url={base_url}",
        "-s", f"ACERVO_PASTA={pasta}",
        "-s", f"LOG_FILE={pasta}/log.txt",
    ]


def baixar_acervo(base_url: str = ACERVO_BASE_URL) -> bool:
    if not base_url:
        logger.error("❌ Defina ACERVO_BASE_URL com o endereço do site do acervo")
        return False

    limpar_pasta_acervo()
    logger.info(f"🚀 Baixando acervo de {base_url}")
    execucao = subprocess.run(montar_comando_crawl(base_url, ACERVO_PASTA))
    if execucao.returncode != 0:
        logger.error(f"❌ scrapy crawl terminou com código {execucao.returncode}")
        return False

    acervo = carregar_acervo(ACERVO_PASTA)
    vazias = [nome for nome, tamanho in acervo.tamanhos().items() if not tamanho]
    if vazias:
        logger.warning(f"⚠️ Coleções sem registros: {', '.join(vazias)}")
    else:
        logger.info("✅ Todas as coleções do acervo foram baixadas")
    return True


# === Execução Principal ===
if __name__ == "__main__":
    raise SystemExit(0 if baixar_acervo() else 1)
