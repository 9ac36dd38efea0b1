"""Official reference documents and suggested questions."""

from fastapi import APIRouter

from sipangkat.models.schemas import DocumentLink, KnowledgeBase

router = APIRouter(tags=["knowledge"])

DOCUMENT_LINKS = [
    DocumentLink(
        label="Folder Dokumen KP",
        url="https://drive.google.com/drive/folders/1uyU5fakd_SaNS7gcrM56H8cM9EE79dZ4",
    ),
    DocumentLink(
        label="File Spesifik KP (PDF)",
        url="https://drive.google.com/file/d/1m1hUc9wsqoXjT_WlmcvjAcbeh5YRATay/view",
    ),
    DocumentLink(
        label="Alur Permohonan PPID",
        url="https://dinkes.samarindakota.go.id/ppid-tatacarapermohonan",
    ),
    DocumentLink(
        label="Tutorial SiCepat-ASN (Youtube)",
        url="https://www.youtube.com/watch?v=L5jjNTvNIbQ",
    ),
]

SUGGESTIONS = [
    "Apa syarat Kenaikan Pangkat Reguler?",
    "Bagaimana alur pengajuan berkas di Dinkes?",
    "Apa bedanya KP Pilihan dan KP Reguler?",
    "Dokumen apa saja yang wajib diupload ke SIASN?",
    "Kapan batas akhir pengumpulan berkas?",
]

UPLOAD_TIP = (
    "Download PDF dari link di atas, lalu upload ke chat agar AI bisa membaca isinya."
)


@router.get("/knowledge-base", response_model=KnowledgeBase)
async def get_knowledge_base() -> KnowledgeBase:
    """List official documents to download and popular questions."""
    return KnowledgeBase(links=DOCUMENT_LINKS, suggestions=SUGGESTIONS, tip=UPLOAD_TIP)
