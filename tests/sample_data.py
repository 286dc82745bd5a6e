"""
Sample ELM downloads used across the test suite.
"""

CLASS_COLUMNS = [
    "Accession", "ELMIdentifier", "FunctionalSiteName", "Description",
    "Regex", "Probability", "#Instances", "#Instances_in_PDB",
]

INSTANCE_COLUMNS = [
    "Accession", "ELMType", "ELMIdentifier", "ProteinName", "Primary_Acc",
    "Accessions", "Start", "End", "References", "Methods", "InstanceLogic",
    "PDB", "Organism",
]


def to_elm_tsv(comments, columns, rows):
    """Format rows the way ELM downloads do: # comments, quoted tab-separated fields."""
    lines = list(comments)
    lines.append("\t".join(f'"{c}"' for c in columns))
    for row in rows:
        lines.append("\t".join(f'"{v}"' for v in row))
    return "\n".join(lines) + "\n"


CLASSES_TSV = to_elm_tsv(
    [
        "#ELM_Classes_Download_Version: 1.4",
        "#ELM_Classes_Download_Date: 2024-05-30 10:12:45.0",
        "#Origin: elm.eu.org",
        "#Type: tsv",
    ],
    CLASS_COLUMNS,
    [
        ["ELME000001", "LIG_TEST_AVL", "Test ligand", "Ligand motif matching AVL", "AVL", "0.0005", "2", "0"],
        ["ELME000002", "MOD_TEST_PK", "Test modification", "Proline-directed site", "P[RK]", "0.004", "1", "0"],
        ["ELME000003", "DEG_TEST_BAD", "Broken", "Unbalanced bracket", "[AV", "0.001", "0", "0"],
        ["ELME000004", "DOC_TEST_NOPROB", "Missing", "Probability not numeric", "DOC", "n/a", "0", "0"],
        ["ELME000005", "DOC_TEST_ST", "Docking", "Serine-threonine pair", "ST", "0.02", "0", "0"],
    ],
)

INSTANCES_TSV = to_elm_tsv(
    [
        "#ELM_Instance_Download_Version: 1.4",
        "#ELM_Instance_Download_Date: 2024-05-30 10:13:01.0",
    ],
    INSTANCE_COLUMNS,
    [
        ["ELMI000001", "LIG", "LIG_TEST_AVL", "P1_HUMAN", "P00001", "P00001", "4", "6",
         "1234", "", "false positive", "", "Homo sapiens"],
        ["ELMI000002", "LIG", "LIG_TEST_AVL", "P2_HUMAN", "P00002", "P00002", "2", "4",
         "1234", "", "true positive", "", "Homo sapiens"],
        ["ELMI000003", "MOD", "MOD_TEST_PK", "P1_HUMAN", "P00001", "P00001", "seven", "8",
         "", "", "true positive", "", "Homo sapiens"],
        ["ELMI000004", "LIG", "LIG_NOT_LOADED", "P1_HUMAN", "P00001", "P00001", "1", "3",
         "", "", "unknown", "", "Homo sapiens"],
    ],
)

PROTEIN_SEQUENCES = {
    "P00001": "MSTAVLPRQ",
    "P00002": "MAVLKK",
}

INSTANCE_PROTEINS_FASTA = (
    ">sp|P00001|P1_HUMAN Test protein one\nMSTAVLPRQ\n"
    ">sp|P00002|P2_HUMAN Test protein two\nMAVLKK\n"
)
