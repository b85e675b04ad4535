"""Express + TypeScript server boilerplate.

The server entry and route index change shape with ``backend.api_versioning``:
the versioned variant imports the ``v1`` router and mounts it at ``/api/v1``.
"""

from __future__ import annotations

from appforge.core.config import ProjectConfig
from appforge.core.templates._common import database_name
from appforge.core.types import ApiType, Database


def _mount(config: ProjectConfig) -> tuple[str, str]:
    """Return the (import line, mount line) used by the server entry."""
    if config.backend.api_versioning:
        return (
            "import v1Routes from './routes/v1';",
            "app.use('/api/v1', v1Routes);",
        )
    return (
        "import routes from './routes';",
        "app.use('/api', routes);",
    )


def server_entry(config: ProjectConfig) -> str:
    route_import, mount = _mount(config)
    imports = [
        "import express, { NextFunction, Request, Response } from 'express';",
        "import cors from 'cors';",
        "import helmet from 'helmet';",
        "import { config } from './config';",
        "import { connectDatabase } from './config/database';",
        route_import,
    ]
    graphql = config.api_type == ApiType.GRAPHQL
    if graphql:
        imports += [
            "import { ApolloServer } from '@apollo/server';",
            "import { expressMiddleware } from '@apollo/server/express4';",
            "import { typeDefs } from './graphql/schema';",
            "import { resolvers } from './graphql/resolvers';",
        ]

    graphql_block = ""
    if graphql:
        graphql_path = "/api/v1/graphql" if config.backend.api_versioning else "/api/graphql"
        graphql_block = f"""
  const apollo = new ApolloServer({{ typeDefs, resolvers }});
  await apollo.start();
  app.use('{graphql_path}', expressMiddleware(apollo));
"""

    return (
        "\n".join(imports)
        + f"""

const app = express();

app.use(helmet());
app.use(cors());
app.use(express.json());
app.use(express.urlencoded({{ extended: true }}));

app.get('/health', (_req: Request, res: Response) => {{
  res.json({{ status: 'ok' }});
}});

// Routes
{mount}

app.use((err: Error, _req: Request, res: Response, _next: NextFunction) => {{
  console.error(err.stack);
  res.status(500).json({{
    success: false,
    message: 'An unexpected error occurred',
    error: config.env === 'production' ? {{}} : err.message,
  }});
}});

async function start(): Promise<void> {{
  await connectDatabase();
{graphql_block}
  app.listen(config.port, () => {{
    console.log(`Server running on port ${{config.port}}`);
  }});
}}

start().catch(error => {{
  console.error('Failed to start server:', error);
  process.exit(1);
}});

export default app;
"""
    )


def backend_config(config: ProjectConfig) -> str:
    database = config.backend.database
    db = database_name(config.name)
    if database == Database.MONGODB:
        db_block = f"    uri: process.env.MONGODB_URI ?? 'mongodb://localhost:27017/{db}',\n"
    elif database == Database.POSTGRES:
        db_block = f"""\
    host: process.env.POSTGRES_HOST ?? 'localhost',
    port: Number(process.env.POSTGRES_PORT ?? 5432),
    database: process.env.POSTGRES_DB ?? '{db}',
    user: process.env.POSTGRES_USER ?? 'postgres',
    password: process.env.POSTGRES_PASSWORD ?? '',
"""
    else:
        db_block = f"""\
    host: process.env.MYSQL_HOST ?? 'localhost',
    port: Number(process.env.MYSQL_PORT ?? 3306),
    database: process.env.MYSQL_DATABASE ?? '{db}',
    user: process.env.MYSQL_USER ?? 'root',
    password: process.env.MYSQL_PASSWORD ?? '',
"""

    auth_block = ""
    if config.features.authentication:
        auth_block = """\
  jwt: {
    // Must be provided through the environment; see .env.example.
    secret: process.env.JWT_SECRET ?? '',
    accessExpirationMinutes: Number(process.env.JWT_ACCESS_EXPIRATION_MINUTES ?? 30),
    refreshExpirationDays: Number(process.env.JWT_REFRESH_EXPIRATION_DAYS ?? 30),
  },
"""

    return f"""\
import dotenv from 'dotenv';

dotenv.config();

export const config = {{
  env: process.env.NODE_ENV ?? 'development',
  port: Number(process.env.PORT ?? 3000),
  apiVersioning: {str(config.backend.api_versioning).lower()},
  database: {{
{db_block}  }},
{auth_block}}};
"""


def database_config(config: ProjectConfig) -> str:
    database = config.backend.database
    if database == Database.MONGODB:
        return """\
import mongoose from 'mongoose';
import { config } from './index';

export async function connectDatabase(): Promise<void> {
  await mongoose.connect(config.database.uri);
  console.log('Connected to MongoDB');
}
"""
    if database == Database.POSTGRES:
        return """\
import { Pool } from 'pg';
import { config } from './index';

export const pool = new Pool(config.database);

export async function connectDatabase(): Promise<void> {
  const client = await pool.connect();
  client.release();
  console.log('Connected to PostgreSQL');
}
"""
    return """\
import mysql from 'mysql2/promise';
import { config } from './index';

export const pool = mysql.createPool(config.database);

export async function connectDatabase(): Promise<void> {
  const connection = await pool.getConnection();
  connection.release();
  console.log('Connected to MySQL');
}
"""


def _mounts(config: ProjectConfig, prefix: str) -> tuple[list[str], list[str]]:
    """Auth routes live in src/routes; item routes sit beside the index that mounts them."""
    imports: list[str] = []
    mounts: list[str] = []
    if config.features.authentication:
        imports.append(f"import authRoutes from '{prefix}auth.routes';")
        mounts.append("router.use('/auth', authRoutes);")
    if config.features.crud_setup:
        imports.append("import itemRoutes from './item.routes';")
        mounts.append("router.use('/items', itemRoutes);")
    return imports, mounts


def _router(imports: list[str], mounts: list[str]) -> str:
    lines = ["import { Router } from 'express';", *imports, "", "const router = Router();", ""]
    lines.append("router.get('/', (_req, res) => {")
    lines.append("  res.json({ message: 'API is running' });")
    lines.append("});")
    if mounts:
        lines.append("")
        lines += mounts
    lines += ["", "export default router;", ""]
    return "\n".join(lines)


def routes_index(config: ProjectConfig) -> str:
    if config.backend.api_versioning:
        return _router(["import v1Routes from './v1';"], ["router.use('/v1', v1Routes);"])
    return _router(*_mounts(config, "./"))


def routes_v1_index(config: ProjectConfig) -> str:
    return _router(*_mounts(config, "../"))


def auth_middleware(config: ProjectConfig) -> str:
    if config.backend.jwt_setup:
        return """\
import { NextFunction, Request, Response } from 'express';
import jwt from 'jsonwebtoken';
import { config } from '../config';

export interface AuthPayload {
  sub: string;
  roles: string[];
}

export interface AuthenticatedRequest extends Request {
  user?: AuthPayload;
}

export function authenticate(req: AuthenticatedRequest, res: Response, next: NextFunction) {
  const header = req.headers.authorization;
  if (!header?.startsWith('Bearer ')) {
    return res.status(401).json({ message: 'Missing bearer token' });
  }
  try {
    req.user = jwt.verify(header.slice(7), config.jwt.secret) as AuthPayload;
    return next();
  } catch (error) {
    return res.status(401).json({ message: 'Invalid or expired token' });
  }
}
"""
    return """\
import { NextFunction, Request, Response } from 'express';

export interface AuthPayload {
  sub: string;
  roles: string[];
}

export interface AuthenticatedRequest extends Request {
  user?: AuthPayload;
}

// Replace with your session or token verification strategy.
export function authenticate(req: AuthenticatedRequest, res: Response, next: NextFunction) {
  if (!req.user) {
    return res.status(401).json({ message: 'Not authenticated' });
  }
  return next();
}
"""


def role_middleware(config: ProjectConfig) -> str:
    return """\
import { NextFunction, Request, Response } from 'express';

type RoleRequest = Request & { user?: { roles?: string[] } };

export function requireRole(...roles: string[]) {
  return (req: RoleRequest, res: Response, next: NextFunction) => {
    const granted = req.user?.roles ?? [];
    if (!roles.some(role => granted.includes(role))) {
      return res.status(403).json({ message: 'Forbidden' });
    }
    return next();
  };
}
"""


def auth_controller(config: ProjectConfig) -> str:
    if config.backend.jwt_setup:
        token = """\
  const token = jwt.sign({ sub: user.id, roles: user.roles }, config.jwt.secret, {
    expiresIn: `${config.jwt.accessExpirationMinutes}m`,
  });
  return res.json({ token, user: { id: user.id, email: user.email, roles: user.roles } });"""
        extra_imports = "import jwt from 'jsonwebtoken';\nimport { config } from '../config';\n"
    else:
        token = "  return res.json({ user: { id: user.id, email: user.email, roles: user.roles } });"
        extra_imports = ""

    return f"""\
import {{ Request, Response }} from 'express';
import bcrypt from 'bcryptjs';
{extra_imports}import {{ findUserByEmail }} from '../models/user.model';

export async function login(req: Request, res: Response) {{
  const {{ email, password }} = req.body;
  const user = await findUserByEmail(email);
  if (!user || !(await bcrypt.compare(password, user.passwordHash))) {{
    return res.status(401).json({{ message: 'Invalid credentials' }});
  }}
{token}
}}
"""


def auth_routes(config: ProjectConfig) -> str:
    return """\
import { Router } from 'express';
import { login } from '../controllers/auth.controller';

const router = Router();

router.post('/login', login);

export default router;
"""


def _model(config: ProjectConfig, name: str, fields: dict[str, str]) -> str:
    type_name = name.capitalize()
    collection = f"{name}s"
    interface = "\n".join(f"  {field}: {ts_type};" for field, ts_type in fields.items())
    database = config.backend.database

    if database == Database.MONGODB:
        schema = "\n".join(
            f"    {field}: {{ type: {'[String]' if ts_type == 'string[]' else ts_type.capitalize()}, "
            f"required: true }},"
            for field, ts_type in fields.items()
        )
        return f"""\
import {{ model, Schema }} from 'mongoose';

export interface {type_name} {{
  id: string;
{interface}
}}

const {name}Schema = new Schema(
  {{
{schema}
  }},
  {{ timestamps: true }}
);

export const {type_name}Model = model('{type_name}', {name}Schema);
"""

    table = f"{name.upper()}_TABLE"
    if database == Database.POSTGRES:
        query = f"const {{ rows }} = await pool.query(`SELECT * FROM ${{{table}}}`);"
    else:
        query = f"const [rows] = await pool.query(`SELECT * FROM ${{{table}}}`);"
    return f"""\
import {{ pool }} from '../config/database';

export interface {type_name} {{
  id: string;
{interface}
}}

export const {table} = '{collection}';

export async function list{type_name}s(): Promise<{type_name}[]> {{
  {query}
  return rows as {type_name}[];
}}
"""


def user_model(config: ProjectConfig) -> str:
    content = _model(
        config, "user", {"email": "string", "passwordHash": "string", "roles": "string[]"}
    )
    if config.backend.database == Database.MONGODB:
        return content + """
export async function findUserByEmail(email: string) {
  return UserModel.findOne({ email }).lean<User & { _id: unknown }>().then(doc =>
    doc ? { ...doc, id: String(doc._id) } : null
  );
}
"""
    return content + """
export async function findUserByEmail(email: string): Promise<User | null> {
  const users = await listUsers();
  return users.find(user => user.email === email) ?? null;
}
"""


def item_model(config: ProjectConfig) -> str:
    return _model(config, "item", {"name": "string", "description": "string"})


def item_controller(config: ProjectConfig) -> str:
    if config.backend.database == Database.MONGODB:
        return """\
import { Request, Response } from 'express';
import { ItemModel } from '../models/item.model';

export async function listItems(_req: Request, res: Response) {
  res.json(await ItemModel.find().lean());
}

export async function getItem(req: Request, res: Response) {
  const item = await ItemModel.findById(req.params.id).lean();
  return item ? res.json(item) : res.status(404).json({ message: 'Not found' });
}

export async function createItem(req: Request, res: Response) {
  res.status(201).json(await ItemModel.create(req.body));
}

export async function updateItem(req: Request, res: Response) {
  const item = await ItemModel.findByIdAndUpdate(req.params.id, req.body, { new: true }).lean();
  return item ? res.json(item) : res.status(404).json({ message: 'Not found' });
}

export async function deleteItem(req: Request, res: Response) {
  await ItemModel.findByIdAndDelete(req.params.id);
  res.status(204).end();
}
"""
    return """\
import { Request, Response } from 'express';
import { listItems as fetchItems } from '../models/item.model';

export async function listItems(_req: Request, res: Response) {
  res.json(await fetchItems());
}

export async function getItem(req: Request, res: Response) {
  const item = (await fetchItems()).find(i => i.id === req.params.id);
  return item ? res.json(item) : res.status(404).json({ message: 'Not found' });
}

export async function createItem(_req: Request, res: Response) {
  res.status(501).json({ message: 'Not implemented' });
}

export async function updateItem(_req: Request, res: Response) {
  res.status(501).json({ message: 'Not implemented' });
}

export async function deleteItem(_req: Request, res: Response) {
  res.status(501).json({ message: 'Not implemented' });
}
"""


def item_routes(config: ProjectConfig) -> str:
    up = "../../" if config.backend.api_versioning else "../"
    guard_import = ""
    guard = ""
    if config.features.authentication:
        guard_import = f"import {{ authenticate }} from '{up}middleware/auth.middleware';\n"
        guard = "authenticate, "
    if config.backend.role_based_auth:
        guard_import += f"import {{ requireRole }} from '{up}middleware/role.middleware';\n"
        guard += "requireRole('admin'), "

    return f"""\
import {{ Router }} from 'express';
import {{
  createItem,
  deleteItem,
  getItem,
  listItems,
  updateItem,
}} from '{up}controllers/item.controller';
{guard_import}
const router = Router();

router.get('/', listItems);
router.get('/:id', getItem);
router.post('/', {guard}createItem);
router.put('/:id', {guard}updateItem);
router.delete('/:id', {guard}deleteItem);

export default router;
"""


def graphql_schema(config: ProjectConfig) -> str:
    item_type = ""
    item_query = ""
    if config.features.crud_setup:
        item_type = """
  type Item {
    id: ID!
    name: String!
    description: String
  }
"""
        item_query = "    items: [Item!]!\n"
    return f"""\
export const typeDefs = `#graphql{item_type}
  type Query {{
    health: String!
{item_query}  }}
`;
"""


def graphql_resolvers(config: ProjectConfig) -> str:
    if config.features.crud_setup:
        if config.backend.database == Database.MONGODB:
            items = (
                "import { ItemModel } from '../models/item.model';\n\n",
                "    items: () => ItemModel.find().lean(),\n",
            )
        else:
            items = (
                "import { listItems } from '../models/item.model';\n\n",
                "    items: () => listItems(),\n",
            )
    else:
        items = ("", "")
    return f"""\
{items[0]}export const resolvers = {{
  Query: {{
    health: () => 'ok',
{items[1]}  }},
}};
"""
